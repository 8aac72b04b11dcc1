import unittest

from odsync.configuration import CONFIG


class TestDefaultConfiguration(unittest.TestCase):
    def test_sections(self):
        self.assertEqual(set(CONFIG), {'Document', 'Project', 'Logging'})

    def test_document_defaults(self):
        document = CONFIG['Document']

        self.assertEqual(document['NAMESPACE_PREFIX'], 'plk')
        self.assertEqual(document['ENCODING'], 'UTF-8')
        self.assertFalse(document['AUTOSAVE'])

    def test_project_prefix_differs_from_document_prefix(self):
        self.assertNotEqual(
            CONFIG['Project']['NAMESPACE_PREFIX'],
            CONFIG['Document']['NAMESPACE_PREFIX'],
        )


if __name__ == '__main__':
    unittest.main()
