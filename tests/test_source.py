import importlib, io, unittest
from pathlib import Path
from unittest import mock

from email_parts import File, InvalidBodyType, config
from email_parts.source import FileSource, LiteralSource, StreamSource, byte_source

FIXTURE = Path(__file__).parent / "fixtures" / "content.txt"


class CountingReader:
    """Non-seekable reader that records every read() call."""

    def __init__(self, data: bytes):
        self._buf = io.BytesIO(data)
        self.reads = 0

    def read(self, size=-1):
        self.reads += 1
        return self._buf.read(size)


class TestByteSource(unittest.TestCase):
    def test_factory_picks_variant(self):
        self.assertIsInstance(byte_source("content"), LiteralSource)
        self.assertIsInstance(byte_source(b"content"), LiteralSource)
        self.assertIsInstance(byte_source(bytearray(b"content")), LiteralSource)
        self.assertIsInstance(byte_source(io.BytesIO(b"content")), StreamSource)
        self.assertIsInstance(byte_source(File(FIXTURE)), FileSource)
        self.assertIsInstance(byte_source(FIXTURE), FileSource)

    def test_factory_rejects_other_types_without_io(self):
        for body in (42, None, ["content"], object()):
            with self.subTest(body=body):
                with self.assertRaises(InvalidBodyType):
                    byte_source(body)

    def test_literal_text_uses_charset(self):
        self.assertEqual(byte_source("é").as_string(), b"\xc3\xa9")
        self.assertEqual(byte_source("é", "iso-8859-1").as_string(), b"\xe9")

    def test_literal_chunks(self):
        with mock.patch.object(config, "CHUNK_SIZE", 3):
            self.assertEqual(list(LiteralSource(b"content").as_stream()), [b"con", b"ten", b"t"])
        self.assertEqual(list(LiteralSource(b"").as_stream()), [])

    def test_seekable_stream_is_rewound(self):
        handle = io.BytesIO(b"content")
        handle.read(3)
        src = StreamSource(handle)
        self.assertEqual(src.as_string(), b"content")
        self.assertEqual(b"".join(src.as_stream()), b"content")

    def test_non_seekable_stream_is_read_once(self):
        reader = CountingReader(b"content")
        src = StreamSource(reader)
        self.assertEqual(src.as_string(), b"content")
        reads = reader.reads
        self.assertEqual(src.as_string(), b"content")
        self.assertEqual(b"".join(src.as_stream()), b"content")
        self.assertEqual(reader.reads, reads)
        src.close()

    def test_stream_is_not_touched_until_read(self):
        reader = CountingReader(b"content")
        src = StreamSource(reader)
        stream = src.as_stream()
        self.assertEqual(reader.reads, 0)
        self.assertEqual(b"".join(stream), b"content")

    def test_text_stream(self):
        self.assertEqual(StreamSource(io.StringIO("café")).as_string(), "café".encode())
        self.assertEqual(StreamSource(io.StringIO("café"), "iso-8859-1").as_string(), b"caf\xe9")

    def test_file_source(self):
        src = FileSource(File(FIXTURE))
        with mock.patch.object(config, "CHUNK_SIZE", 4):
            self.assertEqual(list(src.as_stream()), [b"cont", b"ent"])
        self.assertEqual(src.as_string(), b"content")

    def test_missing_file(self):
        src = FileSource(File(FIXTURE.parent / "missing.txt"))
        with self.assertRaises(FileNotFoundError):
            src.as_string()
        with self.assertRaises(OSError):
            list(src.as_stream())

    def test_importing_config_does_not_read_dotenv(self):
        with mock.patch("dotenv.load_dotenv") as load:
            importlib.reload(config)
        load.assert_not_called()
        self.assertNotIn("load_dotenv", vars(config))

    def test_to_literal(self):
        lit = StreamSource(io.BytesIO(b"content")).to_literal()
        self.assertIsInstance(lit, LiteralSource)
        self.assertEqual(lit.as_string(), b"content")
        self.assertIs(lit.to_literal(), lit)


if __name__ == "__main__":
    unittest.main()
