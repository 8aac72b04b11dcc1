import logging
import unittest

from odsync.logging import ODSYNC_LOGGER, get_logger, set_subtree_levels, verbosity_level


class TestGetLogger(unittest.TestCase):
    def test_child_of_odsync_logger_by_default(self):
        self.assertIs(get_logger(), ODSYNC_LOGGER)
        self.assertEqual(get_logger('Something').name, 'odsync.Something')

    def test_module_loggers_without_parent(self):
        self.assertEqual(get_logger('odsync.xdd.mutation', parent=None).name, 'odsync.xdd.mutation')


class TestVerbosityLevel(unittest.TestCase):
    def test_levels(self):
        self.assertEqual(verbosity_level(0), logging.WARNING)
        self.assertEqual(verbosity_level(1), logging.INFO)
        self.assertEqual(verbosity_level(2), logging.DEBUG)
        self.assertEqual(verbosity_level(10), logging.DEBUG)
        self.assertEqual(verbosity_level(-1), logging.WARNING)


class TestSubtreeLevels(unittest.TestCase):
    def setUp(self):
        self.names = ['odsync.xdd', 'odsync.pipeline']
        self.before = {name: logging.getLogger(name).level for name in self.names}

    def tearDown(self):
        for name, level in self.before.items():
            logging.getLogger(name).setLevel(level)

    def test_subtree_levels_reach_module_loggers(self):
        set_subtree_levels({'odsync.xdd': logging.DEBUG, 'odsync.pipeline': 'ERROR'})

        mutation = logging.getLogger('odsync.xdd.mutation')
        self.assertEqual(mutation.getEffectiveLevel(), logging.DEBUG)
        self.assertEqual(logging.getLogger('odsync.pipeline').level, logging.ERROR)

    def test_foreign_loggers_get_refused(self):
        with self.assertRaises(ValueError):
            set_subtree_levels({'canopen': logging.DEBUG})

        with self.assertRaises(ValueError):
            set_subtree_levels({'odsyncer': logging.DEBUG})


if __name__ == '__main__':
    unittest.main()
