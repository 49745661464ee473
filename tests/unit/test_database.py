import unittest
import sys
import os
from collections import namedtuple
from datetime import datetime
from enum import IntEnum

# 添加项目根目录到Python路径
project_root = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
sys.path.insert(0, project_root)

from configstore.exceptions import DuplicateKeyError, KeyNotFoundError, TypeMismatchError
from configstore.store import ConfigDatabase, ConfigObject, resolve_type_name, zero_value

class TestConfigObject(unittest.TestCase):
    """测试配置记录"""

    def test_wrap_uses_runtime_type(self):
        obj = ConfigObject.wrap("count", 5)
        self.assertEqual(obj.key, "count")
        self.assertEqual(obj.value, 5)
        self.assertEqual(obj.type_name, "builtins.int")

    def test_wrap_with_declared_type(self):
        """声明类型可以是值类型的父类"""
        obj = ConfigObject.wrap("flag", True, int)
        self.assertEqual(obj.type_name, "builtins.int")

    def test_wrap_rejects_incompatible_declared_type(self):
        with self.assertRaises(TypeMismatchError):
            ConfigObject.wrap("count", 5, str)

    def test_resolve_type(self):
        self.assertIs(ConfigObject.wrap("n", 1).resolve_type(), int)
        self.assertIs(resolve_type_name("datetime.datetime"), datetime)
        self.assertIsNone(resolve_type_name("no_such_module.Missing"))
        self.assertIsNone(resolve_type_name("datetime.NoSuchType"))

    def test_zero_value(self):
        self.assertEqual(zero_value(int), 0)
        self.assertEqual(zero_value(str), "")
        self.assertIs(zero_value(bool), False)
        self.assertEqual(zero_value(list), [])
        self.assertIsNone(zero_value(datetime))
        self.assertIsNone(zero_value(None))

    def test_zero_value_of_builtin_subclass(self):
        # 内置类型的子类构造时需要参数，没有零值
        Point = namedtuple("Point", "x y")

        class Level(IntEnum):
            LOW = 1
            HIGH = 2

        self.assertIsNone(zero_value(Point))
        self.assertIsNone(zero_value(Level))
        self.assertEqual(zero_value(tuple), ())

class TestConfigDatabase(unittest.TestCase):
    """测试配置数据库"""

    def setUp(self):
        """初始化测试环境"""
        self.database = ConfigDatabase()
        self.database.set(ConfigObject.wrap("name", "alice"))
        self.database.set(ConfigObject.wrap("age", 30))

    def test_get(self):
        self.assertEqual(self.database.get("name").value, "alice")

    def test_get_is_case_sensitive(self):
        with self.assertRaises(KeyNotFoundError):
            self.database.get("Name")

    def test_get_missing_key(self):
        """缺失键同时可以按KeyError捕获"""
        with self.assertRaises(KeyError):
            self.database.get("missing")

    def test_contains(self):
        self.assertTrue(self.database.contains("age"))
        self.assertFalse(self.database.contains("missing"))
        self.assertIn("age", self.database)

    def test_duplicate_key_rejected(self):
        """不允许覆盖时，原值保持不变"""
        with self.assertRaises(DuplicateKeyError):
            self.database.set(ConfigObject.wrap("name", "bob"))
        self.assertEqual(self.database.get("name").value, "alice")
        self.assertEqual(len(self.database), 2)

    def test_overwrite(self):
        """覆盖后只保留一条记录，且移到末尾"""
        self.database.set(ConfigObject.wrap("name", "bob"), overwrite=True)
        self.assertEqual(self.database.get("name").value, "bob")
        self.assertEqual(self.database.keys(), ["age", "name"])

    def test_remove(self):
        self.database.remove("name")
        self.assertFalse(self.database.contains("name"))
        self.assertEqual(len(self.database), 1)

    def test_remove_is_idempotent(self):
        before = list(self.database)
        self.database.remove("missing")
        self.assertEqual(list(self.database), before)

    def test_equality(self):
        other = ConfigDatabase([ConfigObject.wrap("name", "alice"), ConfigObject.wrap("age", 30)])
        self.assertEqual(self.database, other)
        other.set(ConfigObject.wrap("age", 31), overwrite=True)
        self.assertNotEqual(self.database, other)

    def test_constructor_rejects_duplicates(self):
        with self.assertRaises(DuplicateKeyError):
            ConfigDatabase([ConfigObject.wrap("a", 1), ConfigObject.wrap("a", 2)])

    def test_clear(self):
        self.database.clear()
        self.assertEqual(len(self.database), 0)

if __name__ == '__main__':
    unittest.main()
