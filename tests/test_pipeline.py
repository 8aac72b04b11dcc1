import os
import tempfile
import threading
import unittest
from unittest import mock

from odsync.engine import ErrorCode, Result, accept_all, limits_validator
from odsync.error import AddressingError, DivergenceError, NotEditable, ValidationError
from odsync.node import DeviceNode
from odsync.pipeline import force_actual_value, propose_actual_value, try_actual_value
from odsync.project import ProjectFile
from odsync.xdd.document import XmlDocument
from odsync.xdd.mutation import remove_element


XDC = """<ISO15745ProfileContainer xmlns="http://www.ethernet-powerlink.org">
  <ObjectList>
    <Object index="1006" name="NMT_CycleLen_U32" objectType="7" dataType="0007" accessType="ro" actualValue="1000"/>
    <Object index="1600" name="PDO_RxMappParam_00h_AU64" objectType="9">
      <SubObject subIndex="00" name="NumberOfEntries" objectType="7" dataType="0005" accessType="rw" actualValue="0"/>
      <SubObject subIndex="01" name="ObjectMapping" objectType="7" dataType="001B" accessType="rw"/>
    </Object>
    <Object index="2000" name="Setpoint" objectType="7" dataType="0007" accessType="rw"/>
  </ObjectList>
</ISO15745ProfileContainer>"""

PROJECT = """<openCONFIGURATORProject>
  <CN nodeID="1"/>
</openCONFIGURATORProject>"""


def reject(networkId, nodeId, index, value, subIndex=None):
    return Result.failure(ErrorCode.VALUE_NOT_WITHIN_RANGE, 'Out of bounds [0, 10]')


class Recorder:

    """Validator which records its calls."""

    def __init__(self):
        self.calls = []

    def __call__(self, networkId, nodeId, index, value, subIndex=None):
        self.calls.append((networkId, nodeId, index, value, subIndex))
        return Result.success()


class TestProposeActualValue(unittest.TestCase):
    def setUp(self):
        self.node = DeviceNode('network', 1, XmlDocument.from_string(XDC))
        self.od = self.node.objectDictionary

    def document_value(self, xpath):
        return self.node.xdc.find_first(xpath).get('actualValue')

    def test_accepted_value_updates_model_and_document(self):
        entry = self.od[0x2000]

        propose_actual_value(entry, '42', accept_all)

        self.assertEqual(entry.actualValue, '42')
        self.assertEqual(self.document_value(entry.xpath), '42')
        self.assertIn('actualValue="42"', self.node.xdc.tostring())

    def test_validator_receives_address(self):
        recorder = Recorder()

        propose_actual_value(self.od.find(0x1600, 1), '0x0010000000202000', recorder)
        propose_actual_value(self.od[0x2000], '7', recorder)

        self.assertEqual(recorder.calls, [
            ('network', 1, 0x1600, '0x0010000000202000', 1),
            ('network', 1, 0x2000, '7', None),
        ])

    def test_rejected_value_changes_nothing(self):
        entry = self.od[0x2000]
        before = self.node.xdc.tostring()

        with self.assertRaises(ValidationError) as cm:
            propose_actual_value(entry, '42', reject)

        self.assertEqual(str(cm.exception), 'Out of bounds [0, 10]')
        self.assertIsNone(entry.actualValue)
        self.assertEqual(self.node.xdc.tostring(), before)

    def test_read_only_entries_are_not_editable(self):
        entry = self.od[0x1006]
        recorder = Recorder()

        with self.assertRaises(NotEditable):
            propose_actual_value(entry, '2000', recorder)

        self.assertEqual(recorder.calls, [])
        self.assertEqual(entry.actualValue, '1000')
        self.assertEqual(self.document_value(entry.xpath), '1000')

    def test_not_editable_is_a_validation_error(self):
        self.assertTrue(issubclass(NotEditable, ValidationError))

    def test_sub_entry_edit_only_touches_its_sub_object(self):
        sub = self.od.find(0x1600, 0)

        propose_actual_value(sub, '1', limits_validator(self.node))

        self.assertEqual(sub.actualValue, '1')
        self.assertEqual(self.document_value(sub.xpath), '1')
        self.assertIsNone(self.document_value(self.od.find(0x1600, 1).xpath))
        self.assertIsNone(self.document_value(self.od[0x1600].xpath))

    def test_model_only_edit(self):
        entry = self.od[0x2000]

        propose_actual_value(entry, '42', accept_all, writeToXdc=False)

        self.assertEqual(entry.actualValue, '42')
        self.assertIsNone(self.document_value(entry.xpath))

    def test_unresolvable_entry_diverges(self):
        entry = self.od[0x2000]
        remove_element(self.node.xdc, entry.xpath)

        with self.assertLogs('odsync.xdd.mutation', 'ERROR'):
            with self.assertRaises(DivergenceError):
                propose_actual_value(entry, '42', accept_all)

        self.assertEqual(entry.actualValue, '42')

    def test_invalid_xml_value_diverges(self):
        entry = self.od[0x2000]

        with self.assertRaises(DivergenceError):
            propose_actual_value(entry, 'a\x00b', accept_all)

        self.assertEqual(entry.actualValue, 'a\x00b')
        self.assertIsNone(self.document_value(entry.xpath))

    def test_autosave_writes_document_to_disk(self):
        entry = self.od[0x2000]
        with tempfile.TemporaryDirectory() as dirpath:
            self.node.xdc.filepath = os.path.join(dirpath, 'device.xdc')
            with mock.patch('odsync.pipeline.AUTOSAVE', True):
                propose_actual_value(entry, '42', accept_all)

            with open(self.node.xdc.filepath, encoding='utf-8') as fp:
                content = fp.read()

        self.assertIn('actualValue="42"', content)

    def test_failing_autosave_diverges(self):
        entry = self.od[0x2000]
        self.node.xdc.filepath = os.path.join(tempfile.gettempdir(), 'does', 'not', 'exist', 'device.xdc')

        with mock.patch('odsync.pipeline.AUTOSAVE', True):
            with self.assertRaises(DivergenceError):
                propose_actual_value(entry, '42', accept_all)

        self.assertEqual(entry.actualValue, '42')

    def test_no_autosave_without_file_path(self):
        entry = self.od[0x2000]

        with mock.patch('odsync.pipeline.AUTOSAVE', True):
            propose_actual_value(entry, '42', accept_all)

        self.assertIsNone(self.node.xdc.filepath)
        self.assertEqual(self.document_value(entry.xpath), '42')

    def test_reading_waits_for_engine_call(self):
        entry = self.od[0x2000]
        started = threading.Event()
        release = threading.Event()
        readings = []

        def slow_engine(networkId, nodeId, index, value, subIndex=None):
            started.set()
            release.wait(5.0)
            return Result.success()

        editor = threading.Thread(target=propose_actual_value, args=(entry, '42', slow_engine))
        editor.start()
        started.wait(5.0)
        reader = threading.Thread(target=lambda: readings.append(entry.actualValue))
        reader.start()
        reader.join(0.1)

        self.assertTrue(reader.is_alive())

        release.set()
        editor.join()
        reader.join()

        self.assertEqual(readings, ['42'])

    def test_concurrent_edits_leave_model_and_document_consistent(self):
        entry = self.od[0x2000]
        values = [str(i) for i in range(20)]
        threads = [
            threading.Thread(target=propose_actual_value, args=(entry, value, accept_all))
            for value in values
        ]
        for thread in threads:
            thread.start()

        for thread in threads:
            thread.join()

        self.assertIn(entry.actualValue, values)
        self.assertEqual(self.document_value(entry.xpath), entry.actualValue)


class TestTryActualValue(unittest.TestCase):
    def setUp(self):
        self.node = DeviceNode('network', 1, XmlDocument.from_string(XDC))
        self.entry = self.node.objectDictionary[0x2000]

    def test_accepted(self):
        self.assertIsNone(try_actual_value(self.entry, '42', accept_all))
        self.assertEqual(self.entry.actualValue, '42')

    def test_rejected_returns_message(self):
        self.assertEqual(try_actual_value(self.entry, '42', reject), 'Out of bounds [0, 10]')
        self.assertIsNone(self.entry.actualValue)

    def test_engine_message_from_error_code(self):
        msg = try_actual_value(self.entry, '-1', limits_validator(self.node))

        self.assertIn('UNSIGNED32', msg)


class TestForceActualValue(unittest.TestCase):
    def test_node_without_project_file(self):
        node = DeviceNode('network', 1, XmlDocument.from_string(XDC))
        entry = node.objectDictionary[0x2000]

        self.assertFalse(entry.is_forced())
        with self.assertRaises(AddressingError):
            force_actual_value(entry)

    def test_forcing_entries(self):
        node = DeviceNode('network', 1, XmlDocument.from_string(XDC), ProjectFile.from_string(PROJECT))
        entry = node.objectDictionary[0x2000]
        sub = node.objectDictionary.find(0x1600, 1)

        self.assertTrue(force_actual_value(entry))
        self.assertTrue(force_actual_value(sub))
        self.assertFalse(force_actual_value(entry))

        self.assertTrue(entry.is_forced())
        self.assertTrue(sub.is_forced())
        self.assertFalse(node.objectDictionary[0x1600].is_forced())

        self.assertTrue(force_actual_value(entry, force=False))
        self.assertFalse(entry.is_forced())

    def test_project_file_gets_saved(self):
        with tempfile.TemporaryDirectory() as dirpath:
            filepath = os.path.join(dirpath, 'project.xml')
            with open(filepath, 'w') as fp:
                fp.write(PROJECT)

            node = DeviceNode('network', 1, XmlDocument.from_string(XDC), ProjectFile.load(filepath))
            force_actual_value(node.objectDictionary[0x2000])

            self.assertTrue(ProjectFile.load(filepath).is_forced(1, 0x2000))


if __name__ == '__main__':
    unittest.main()
