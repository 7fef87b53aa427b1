import base64, contextlib, io, json, tempfile, unittest
from pathlib import Path

from email_parts import TextPart
from email_parts.tool import (
    build_text_part,
    list_encodings,
    parse_header_arg,
    part_to_raw_payload,
    summarize_part,
    write_part,
)
from scripts.render_part import main

FIXTURE = Path(__file__).parent / "fixtures" / "content.txt"


def b64url_decode(data: str) -> bytes:
    return base64.urlsafe_b64decode(data + "=" * (-len(data) % 4))


class TestTool(unittest.TestCase):
    def test_parse_header_arg(self):
        self.assertEqual(parse_header_arg("X-Campaign: welcome"), ("X-Campaign", "welcome"))
        self.assertEqual(parse_header_arg("foo:bar:baz"), ("foo", "bar:baz"))
        with self.assertRaises(ValueError):
            parse_header_arg("no separator")

    def test_build_text_part_from_file(self):
        p = build_text_part(FIXTURE, encoding="base64", headers=["foo: bar"])
        self.assertEqual(p.body_to_string(), b"Y29udGVudA==")
        self.assertEqual(p.headers.get("foo").value, "bar")
        self.assertIsNone(p.charset)

    def test_build_text_part_from_stdin(self):
        p = build_text_part("-", stdin=io.BytesIO(b"content"), charset="utf-8", subtype="html")
        self.assertEqual(p.get_body(), b"content")
        self.assertEqual(p.as_debug_string(), "text/html charset: utf-8")

    def test_summarize_part(self):
        p = TextPart("content", encoding="base64")
        p.headers.add_text_header("foo", "bar")
        self.assertEqual(
            summarize_part(p),
            {
                "content_type": "text/plain",
                "charset": "utf-8",
                "encoding": "base64",
                "disposition": None,
                "headers": {
                    "Content-Type": "text/plain; charset=utf-8",
                    "Content-Transfer-Encoding": "base64",
                    "foo": "bar",
                },
                "size": 7,
                "encoded_size": 12,
            },
        )

    def test_part_to_raw_payload(self):
        p = TextPart("content")
        payload = part_to_raw_payload(p)
        self.assertNotIn("=", payload["raw"])
        self.assertEqual(b64url_decode(payload["raw"]), p.to_string())

    def test_write_part(self):
        p = TextPart("x" * 20000, encoding="quoted-printable")
        streamed, buffered = io.BytesIO(), io.BytesIO()
        n = write_part(p, streamed)
        write_part(p, buffered, stream=False)
        self.assertEqual(streamed.getvalue(), buffered.getvalue())
        self.assertEqual(n, len(p.to_string()))

    def test_list_encodings(self):
        self.assertEqual(list_encodings()[:3], ["quoted-printable", "base64", "8bit"])


class TestRenderPartScript(unittest.TestCase):
    def test_renders_file_to_output(self):
        with tempfile.TemporaryDirectory() as tmp:
            out = Path(tmp) / "part.eml"
            with contextlib.redirect_stdout(io.StringIO()):
                rc = main([str(FIXTURE), "-o", str(out), "--encoding", "base64", "--charset", "utf-8",
                           "--header", "foo: bar"])
            self.assertEqual(rc, 0)
            self.assertEqual(
                out.read_bytes(),
                b"Content-Type: text/plain; charset=utf-8\r\n"
                b"Content-Transfer-Encoding: base64\r\n"
                b"foo: bar\r\n"
                b"\r\n"
                b"Y29udGVudA==",
            )

    def test_summary_format(self):
        buf = io.StringIO()
        with contextlib.redirect_stdout(buf):
            rc = main([str(FIXTURE), "--format", "summary"])
        self.assertEqual(rc, 0)
        summary = json.loads(buf.getvalue())
        self.assertEqual(summary["encoding"], "quoted-printable")
        self.assertEqual(summary["size"], 7)

    def test_list_encodings_flag(self):
        buf = io.StringIO()
        with contextlib.redirect_stdout(buf):
            rc = main(["--list-encodings"])
        self.assertEqual(rc, 0)
        self.assertEqual(buf.getvalue().split(), ["quoted-printable", "base64", "8bit"])

    def test_unknown_encoding_is_an_error(self):
        with contextlib.redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit) as ctx:
                main([str(FIXTURE), "--encoding", "nope"])
        self.assertEqual(ctx.exception.code, 2)


if __name__ == "__main__":
    unittest.main()
