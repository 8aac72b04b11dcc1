import unittest

from odsync.error import ConstructionError
from odsync.node import DeviceNode
from odsync.od.dictionary import ObjectDictionary
from odsync.xdd.document import XmlDocument


XDC = """<ISO15745ProfileContainer xmlns="http://www.ethernet-powerlink.org">
  <ISO15745Profile>
    <ProfileBody>
      <ApplicationProcess>
        <parameterList>
          <parameter uniqueID="UID_PARAM_Speed" access="readWrite"/>
        </parameterList>
      </ApplicationProcess>
    </ProfileBody>
  </ISO15745Profile>
  <ISO15745Profile>
    <ProfileBody>
      <ObjectList>
        <Object index="1000" name="NMT_DeviceType_U32" objectType="7" dataType="0007" accessType="const" PDOmapping="no"/>
        <Object index="1006" name="NMT_CycleLen_U32" objectType="7" dataType="0007" accessType="rw" PDOmapping="no"/>
        <Object index="broken" name="Broken"/>
        <Object index="1A00" name="PDO_TxMappParam_00h_AU64" objectType="9">
          <SubObject subIndex="00" name="NumberOfEntries" objectType="7" dataType="0005" accessType="rw"/>
          <SubObject subIndex="01" name="ObjectMapping" objectType="7" dataType="001B" accessType="ro" PDOmapping="TPDO"/>
        </Object>
        <Object index="2000" name="Speed" objectType="7" dataType="0006" accessType="ro" PDOmapping="RPDO" uniqueIDRef="UID_PARAM_Speed"/>
        <Object index="2001" name="Dangling" objectType="7" dataType="0006" accessType="rw" PDOmapping="RPDO" uniqueIDRef="UID_PARAM_Missing"/>
        <Object index="6000" name="DigitalInput" objectType="7" dataType="0005" accessType="ro" PDOmapping="TPDO"/>
      </ObjectList>
    </ProfileBody>
  </ISO15745Profile>
</ISO15745ProfileContainer>"""


class TestObjectDictionary(unittest.TestCase):
    def setUp(self):
        self.node = DeviceNode('network', 1, XmlDocument.from_string(XDC))
        self.od = self.node.objectDictionary

    def test_faulty_objects_get_skipped(self):
        self.assertEqual(list(self.od), [0x1000, 0x1006, 0x1A00, 0x2000, 0x2001, 0x6000])

    def test_strict_mode_raises(self):
        with self.assertRaises(ConstructionError):
            ObjectDictionary.from_node(self.node, strict=True)

    def test_lookup_by_all_index_forms(self):
        for index in [0x1006, 4102, '0x1006', '1006', b'\x10\x06']:
            self.assertEqual(self.od[index].name, 'NMT_CycleLen_U32')
            self.assertIn(index, self.od)

    def test_unknown_index(self):
        self.assertIsNone(self.od.get(0x1234))
        self.assertNotIn('garbage', self.od)
        with self.assertRaises(KeyError):
            self.od['garbage']

    def test_find_sub_entry(self):
        sub = self.od.find('0x1A00', '0x01')

        self.assertEqual(sub.name, 'ObjectMapping')
        self.assertEqual(sub.dataType, 'UNSIGNED64')
        self.assertIsNone(self.od.find(0x1A00, 0x02))
        self.assertIsNone(self.od.find(0x1B00, 0x01))
        self.assertIs(self.od.find(0x1A00), self.od[0x1A00])

    def test_mappable_entries(self):
        rpdo = [(e.index, e.subIndex) for e in self.od.rpdo_mappable()]
        tpdo = [(e.index, e.subIndex) for e in self.od.tpdo_mappable()]

        self.assertEqual(rpdo, [(0x2000, None), (0x2001, None)])
        self.assertEqual(tpdo, [(0x1A00, 1), (0x6000, None)])

    def test_resolve_unique_id_reference(self):
        element = self.od.resolve_reference(self.od[0x2000])

        self.assertEqual(element.get('access'), 'readWrite')

    def test_unresolvable_references(self):
        self.assertIsNone(self.od.resolve_reference(self.od[0x2001]))
        self.assertIsNone(self.od.resolve_reference(self.od[0x1006]))

    def test_entries_resolve_in_document(self):
        for entry in self.od.values():
            self.assertIsNotNone(self.node.xdc.find_first(entry.xpath))
            for sub in entry.subEntries:
                self.assertIsNotNone(self.node.xdc.find_first(sub.xpath))

    def test_object_dictionary_is_cached_until_reload(self):
        self.assertIs(self.node.objectDictionary, self.od)

        self.node.reload()

        self.assertIsNot(self.node.objectDictionary, self.od)

    def test_duplicate_objects_keep_the_first_one(self):
        xml = '<ObjectList><Object index="1000" name="First"/><Object index="1000" name="Second"/></ObjectList>'
        node = DeviceNode('network', 1, XmlDocument.from_string(xml))

        self.assertEqual(node.objectDictionary[0x1000].name, 'First')
        self.assertEqual(len(node.objectDictionary), 1)


if __name__ == '__main__':
    unittest.main()
