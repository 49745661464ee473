import unittest
import tempfile
import shutil
import sys
import os

import yaml
from typer.testing import CliRunner

# 添加项目根目录到Python路径
project_root = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
sys.path.insert(0, project_root)

from configstore.cli import app
from configstore.manager import ConfigManager
from configstore.serializers import PickleSerializer, YamlSerializer

class TestCli(unittest.TestCase):
    """测试命令行示例程序"""

    def setUp(self):
        """初始化测试环境"""
        self.test_dir = tempfile.mkdtemp()
        self.path = os.path.join(self.test_dir, "cli.yaml")
        self.runner = CliRunner()

    def tearDown(self):
        """清理测试环境"""
        shutil.rmtree(self.test_dir, ignore_errors=True)

    def invoke(self, *args):
        return self.runner.invoke(app, ["--store", self.path, "--log-level", "ERROR", *args])

    def test_set_and_get(self):
        result = self.invoke("set", "msg", "Hello, World!")
        self.assertEqual(result.exit_code, 0, result.output)
        
        result = self.invoke("get", "msg")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Hello, World!", result.output)
        self.assertEqual(ConfigManager(self.path, YamlSerializer()).get("msg"), "Hello, World!")

    def test_typed_values(self):
        self.assertEqual(self.invoke("set", "count", "5", "--type", "int").exit_code, 0)
        self.assertEqual(self.invoke("set", "debug", "yes", "--type", "bool").exit_code, 0)
        self.assertEqual(self.invoke("set", "tags", "[a, b]", "--type", "yaml").exit_code, 0)
        
        manager = ConfigManager(self.path, YamlSerializer())
        self.assertEqual(manager.get("count", int), 5)
        self.assertIs(manager.get("debug", bool), True)
        self.assertEqual(manager.get("tags", list), ["a", "b"])

    def test_invalid_value(self):
        result = self.invoke("set", "count", "five", "--type", "int")
        self.assertEqual(result.exit_code, 1)
        self.assertFalse(os.path.exists(self.path))

    def test_type_mismatch(self):
        self.invoke("set", "count", "5", "--type", "int")
        result = self.invoke("get", "count", "--type", "str")
        self.assertEqual(result.exit_code, 1)

    def test_status_messages(self):
        result = self.invoke("set", "msg", "hi")
        self.assertIn("[+] 已设置 msg", result.output)
        # 非终端输出不带颜色控制符
        self.assertNotIn("\x1b[", result.output)

        result = self.invoke("remove", "absent")
        self.assertIn("[*] 键不存在: absent", result.output)

        result = self.invoke("set", "count", "five", "--type", "int")
        self.assertIn("[-] 无法解析值 'five'", result.output)

    def test_get_missing(self):
        self.assertEqual(self.invoke("get", "absent").exit_code, 1)

    def test_contains(self):
        result = self.invoke("contains", "msg")
        self.assertEqual(result.exit_code, 1)
        self.assertIn("false", result.output)
        
        self.invoke("set", "msg", "hi")
        result = self.invoke("contains", "msg")
        self.assertEqual(result.exit_code, 0)
        self.assertIn("true", result.output)

    def test_remove(self):
        self.invoke("set", "msg", "hi")
        self.assertEqual(self.invoke("remove", "msg").exit_code, 0)
        self.assertFalse(ConfigManager(self.path, YamlSerializer()).contains("msg"))
        # 再次删除不报错
        self.assertEqual(self.invoke("remove", "msg").exit_code, 0)

    def test_list(self):
        self.invoke("set", "msg", "hi")
        self.invoke("set", "count", "3", "--type", "int")
        result = self.invoke("list")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("msg (builtins.str): hi", result.output)
        self.assertIn("count (builtins.int): 3", result.output)

    def test_demo(self):
        result = self.invoke("demo")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Hello, World!", result.output)
        self.assertTrue(os.path.exists(self.path))
        
        result = self.invoke("demo")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Hello, World!", result.output)

    def test_pickle_format(self):
        path = os.path.join(self.test_dir, "cli.pkl")
        result = self.runner.invoke(app, ["--store", path, "--format", "pickle", "set", "msg", "hi"])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(ConfigManager(path, PickleSerializer()).get("msg"), "hi")

    def test_unknown_format(self):
        result = self.runner.invoke(app, ["--store", self.path, "--format", "xml", "list"])
        self.assertEqual(result.exit_code, 1)

    def test_settings_file(self):
        settings_path = os.path.join(self.test_dir, "configstore.yaml")
        store_path = os.path.join(self.test_dir, "from_settings.pkl")
        with open(settings_path, "w", encoding="utf-8") as f:
            yaml.safe_dump({"store": {"path": store_path, "format": "pickle", "auto_save": False}}, f)
        
        result = self.runner.invoke(app, ["--settings", settings_path, "set", "msg", "hi"])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(ConfigManager(store_path, PickleSerializer()).get("msg"), "hi")

if __name__ == '__main__':
    unittest.main()
