"""Tests for SFF XML rendering."""
import unittest

from sff_document.model.balloon_model import Balloon
from sff_document.model.constants import BalloonType
from sff_document.model.document_model import Document, Metadata
from sff_document.parser.errors import InvalidMetadataError, UnencodableTextError
from sff_document.renderer.utils import escape_attribute, escape_text
from sff_document.renderer.xml_renderer import CounterMode, XmlRenderer

SAMPLE_XML = (
    "<Document><Metadata><Script>Scanlation Script File v0.2.0</Script><App></App><Info></Info>"
    "<TLLength>3</TLLength><PRLength>1</PRLength><CMLength>0</CMLength>"
    "<BalloonCount>2</BalloonCount><LineCount>2</LineCount></Metadata>"
    '<Balloons><Balloon type="OT"><TL>num</TL><TL>nam</TL><PR>numnam</PR></Balloon>'
    '<Balloon type="Dialogue"><TL>num</TL></Balloon></Balloons></Document>'
)


def build_sample_document() -> Document:
    document = Document.new_empty()
    document.balloons.append(
        Balloon(balloon_type=BalloonType.OT, tl_content=["num", "nam"], pr_content=["numnam"])
    )
    document.balloons.append(Balloon(balloon_type=BalloonType.DIALOGUE, tl_content=["num"]))
    return document


class XmlRendererTest(unittest.TestCase):
    """Layout, counters, and escaping of rendered documents."""

    def test_render_sample_document(self) -> None:
        self.assertEqual(XmlRenderer().render(build_sample_document()), SAMPLE_XML)

    def test_render_empty_document(self) -> None:
        xml = XmlRenderer().render(Document.new_empty())
        self.assertEqual(
            xml,
            "<Document><Metadata><Script>Scanlation Script File v0.2.0</Script><App></App><Info></Info>"
            "<TLLength>0</TLLength><PRLength>0</PRLength><CMLength>0</CMLength>"
            "<BalloonCount>0</BalloonCount><LineCount>0</LineCount></Metadata>"
            "<Balloons></Balloons></Document>",
        )

    def test_recompute_does_not_mutate_document(self) -> None:
        document = build_sample_document()
        XmlRenderer(CounterMode.RECOMPUTE).render(document)
        self.assertEqual(document.metadata, Metadata())

    def test_as_stored_writes_counters_verbatim(self) -> None:
        document = build_sample_document()
        document.metadata.tl_length = 9
        document.metadata.balloon_count = 40
        xml = XmlRenderer(CounterMode.AS_STORED).render(document)
        self.assertIn("<TLLength>9</TLLength>", xml)
        self.assertIn("<PRLength>0</PRLength>", xml)
        self.assertIn("<BalloonCount>40</BalloonCount>", xml)

    def test_as_stored_rejects_negative_counters(self) -> None:
        document = build_sample_document()
        document.metadata.line_count = -1
        with self.assertRaises(InvalidMetadataError) as ctx:
            XmlRenderer(CounterMode.AS_STORED).render(document)
        self.assertEqual(ctx.exception.field_name, "LineCount")
        self.assertEqual(XmlRenderer(CounterMode.RECOMPUTE).render(document), SAMPLE_XML)

    def test_lines_are_grouped_by_category(self) -> None:
        balloon = Balloon(balloon_type="OT", tl_content=["t1", "t2"], pr_content=["p1"], cm_content=["c1"])
        document = Document(balloons=[balloon])
        xml = XmlRenderer().render(document)
        self.assertIn(
            '<Balloon type="OT"><TL>t1</TL><TL>t2</TL><PR>p1</PR><Comment>c1</Comment></Balloon>',
            xml,
        )

    def test_empty_type_is_written_as_empty_attribute(self) -> None:
        xml = XmlRenderer().render(Document(balloons=[Balloon()]))
        self.assertIn('<Balloon type=""></Balloon>', xml)

    def test_image_is_base64_without_padding(self) -> None:
        balloon = Balloon(balloon_type="Square")
        balloon.add_image("png", b"\xfb\xff")
        xml = XmlRenderer().render(Document(balloons=[balloon]))
        self.assertIn('<img type="png">-_8</img></Balloon>', xml)

    def test_metadata_strings_are_escaped(self) -> None:
        document = Document(metadata=Metadata(app="A&B <beta>", info="tabs\tand\r\nbreaks"))
        xml = XmlRenderer().render(document)
        self.assertIn("<App>A&amp;B &lt;beta&gt;</App>", xml)
        self.assertIn("<Info>tabs\tand&#13;\nbreaks</Info>", xml)

    def test_type_attribute_is_escaped(self) -> None:
        xml = XmlRenderer().render(Document(balloons=[Balloon(balloon_type='say "hi"\n<&>')]))
        self.assertIn('<Balloon type="say &quot;hi&quot;&#10;&lt;&amp;&gt;">', xml)

    def test_unencodable_text_raises(self) -> None:
        document = Document(balloons=[Balloon(tl_content=["bell\x07"])])
        with self.assertRaises(UnencodableTextError):
            XmlRenderer().render(document)

    def test_pretty_output(self) -> None:
        document = Document(balloons=[Balloon(balloon_type="OT", tl_content=["hi"])])
        lines = XmlRenderer(pretty=True).render(document).splitlines()
        self.assertEqual(lines[0], "<Document>")
        self.assertEqual(lines[1], "  <Metadata>")
        self.assertEqual(lines[2], "    <Script>Scanlation Script File v0.2.0</Script>")
        self.assertIn('    <Balloon type="OT">', lines)
        self.assertIn("      <TL>hi</TL>", lines)
        self.assertEqual(lines[-1], "</Document>")


class EscapeTest(unittest.TestCase):
    """Escaping helpers used for text and attribute values."""

    def test_escape_text(self) -> None:
        self.assertEqual(escape_text("a < b && c > d"), "a &lt; b &amp;&amp; c &gt; d")
        self.assertEqual(escape_text('quote " stays'), 'quote " stays')
        self.assertEqual(escape_text("cr\r\nlf"), "cr&#13;\nlf")

    def test_escape_attribute(self) -> None:
        self.assertEqual(escape_attribute('"\t\n\r'), "&quot;&#9;&#10;&#13;")

    def test_surrogates_and_control_chars_are_rejected(self) -> None:
        for value in ("\x00", "\x1b[0m", "\ud800", "\uFFFE"):
            with self.subTest(value=repr(value)):
                with self.assertRaises(UnencodableTextError):
                    escape_text(value)

    def test_astral_characters_pass_through(self) -> None:
        self.assertEqual(escape_text("\U0001F600"), "\U0001F600")


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
