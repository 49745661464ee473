import unittest
import tempfile
import shutil
import logging
import sys
import os

# 添加项目根目录到Python路径
project_root = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
sys.path.insert(0, project_root)

from configstore.utils import logger as logger_module
from configstore.utils.logger import get_logger, init_logger, set_log_level

class TestLogger(unittest.TestCase):
    """测试日志工具"""

    def setUp(self):
        """保存全局日志状态"""
        self.test_dir = tempfile.mkdtemp()
        self.root = logging.getLogger()
        self.root_handlers = list(self.root.handlers)
        self.root_level = self.root.level
        self.root_configured = logger_module._root_configured

    def tearDown(self):
        """恢复全局日志状态"""
        for handler in self.root.handlers:
            if handler not in self.root_handlers:
                handler.close()
        self.root.handlers = self.root_handlers
        self.root.setLevel(self.root_level)
        logger_module._root_configured = self.root_configured
        for name in ("configstore.test.console", "configstore.test.file"):
            logger = logging.getLogger(name)
            logger.handlers.clear()
            logger.propagate = True
        shutil.rmtree(self.test_dir, ignore_errors=True)

    def test_get_logger_adds_single_handler(self):
        logger = get_logger("configstore.test.console")
        get_logger("configstore.test.console")
        self.assertEqual(len(logger.handlers), 1)
        self.assertFalse(logger.propagate)

    def test_set_log_level(self):
        logger = get_logger("configstore.test.console")
        set_log_level(logging.ERROR)
        self.assertEqual(logger.level, logging.ERROR)
        # 已配置的日志器不会被get_logger重置级别
        get_logger("configstore.test.console")
        self.assertEqual(logger.level, logging.ERROR)

    def test_init_logger_writes_file(self):
        logger = get_logger("configstore.test.file")
        init_logger(self.test_dir, logging.INFO)
        self.assertTrue(logger.propagate)
        
        logger.info("写入日志文件")
        for handler in self.root.handlers:
            handler.flush()
        with open(os.path.join(self.test_dir, "configstore.log"), encoding="utf-8") as f:
            self.assertIn("写入日志文件", f.read())

if __name__ == '__main__':
    unittest.main()
