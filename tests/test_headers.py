import unittest

from awsv4.headers import Header, HeaderStore


class TestHeaderStore(unittest.TestCase):

    def test_empty(self) -> None:
        self.assertEqual(len(HeaderStore()), 0)
        self.assertEqual(list(HeaderStore()), [])

    def test_insert_lowercases(self) -> None:
        store = HeaderStore()
        store.insert('Content-Type', 'text/plain')
        self.assertEqual(list(store), ['content-type'])
        self.assertEqual(store.get('CONTENT-TYPE'), ['text/plain'])
        self.assertIn('Content-type', store)

    def test_add_second_value(self) -> None:
        store = HeaderStore()
        store.insert('test', 'a string')
        store.insert('Test', 'another string')
        self.assertEqual(store.get('test'), ['a string', 'another string'])

    def test_iterates_sorted(self) -> None:
        store = HeaderStore([Header('Xyz', '1'), Header('abc', '2'), Header('Mno', '3')])
        self.assertEqual(list(store), ['abc', 'mno', 'xyz'])

    def test_from_mapping(self) -> None:
        store = HeaderStore({'Host': 'example.com', 'X-Multi': ['a', 'b'], 'X-Count': 3})
        self.assertEqual(dict(store.items()), {
            'host': ['example.com'],
            'x-count': ['3'],
            'x-multi': ['a', 'b'],
        })

    def test_signable_skips_authorization(self) -> None:
        store = HeaderStore({'AUTHORIZATION': 'none', 'Host': 'example.com'})
        self.assertIn('authorization', store)
        self.assertEqual([name for name, _ in store.signable()], ['host'])

    def test_copy_is_independent(self) -> None:
        store = HeaderStore({'Host': 'example.com'})
        clone = store.copy()
        clone.insert('host', 'other.com')
        clone.insert('x-new', '1')
        self.assertEqual(store.get('host'), ['example.com'])
        self.assertNotIn('x-new', store)
        self.assertNotEqual(store, clone)

    def test_replace(self) -> None:
        store = HeaderStore({'X-Amz-Date': ['20200101T000000Z', '20200102T000000Z']})
        store.replace('x-amz-date', '20110909T233600Z')
        self.assertEqual(store.get('X-Amz-Date'), ['20110909T233600Z'])

    def test_get_returns_copy(self) -> None:
        store = HeaderStore({'Host': 'example.com'})
        store.get('host').append('mutated')
        self.assertEqual(store.get('host'), ['example.com'])

    def test_get_missing(self) -> None:
        self.assertIsNone(HeaderStore().get('host'))


if __name__ == '__main__':
    unittest.main(verbosity=2)
