"""Tests for the lossy plain-text script format."""
import unittest

from sff_document.model.balloon_model import Balloon
from sff_document.model.constants import BalloonType
from sff_document.model.document_model import Document
from sff_document.parser.text_parser import TextParser
from sff_document.renderer.text_renderer import TextRenderer


class TextRendererTest(unittest.TestCase):
    """Rendering balloons into a reading script."""

    def test_proofread_lines_take_precedence(self) -> None:
        balloon = Balloon(tl_content=["a"], pr_content=["a", "ZZZZZ"], cm_content=["a"])
        balloon.add_image("jpg", b"\x00")
        text = TextRenderer().render(Document(balloons=[balloon]))
        self.assertEqual(text, "(): a\n//\n(): ZZZZZ")

    def test_headers_per_type(self) -> None:
        document = Document(
            balloons=[
                Balloon(balloon_type=balloon_type, tl_content=["x"])
                for balloon_type in (
                    BalloonType.DIALOGUE,
                    BalloonType.OT,
                    BalloonType.SQUARE,
                    BalloonType.ST,
                    BalloonType.THINKING,
                    "Custom",
                )
            ]
        )
        self.assertEqual(
            TextRenderer().render(document).split("\n\n"),
            ["(): x", "OT: x", "[]: x", "ST: x", "{}: x", "(): x"],
        )

    def test_balloons_without_text_are_skipped(self) -> None:
        document = Document(
            balloons=[Balloon(tl_content=["one"]), Balloon(cm_content=["only a note"]), Balloon(tl_content=["two"])]
        )
        self.assertEqual(TextRenderer().render(document), "(): one\n\n(): two")


class TextParserTest(unittest.TestCase):
    """Reading a script back into balloons."""

    def test_parse_rendered_script(self) -> None:
        script = "OT: numnam\n\n(): first\n//\n(): second\n\n{}: thought"
        document = TextParser(script).parse()
        self.assertEqual(
            document.balloons,
            [
                Balloon(balloon_type=BalloonType.OT, tl_content=["numnam"]),
                Balloon(balloon_type=BalloonType.DIALOGUE, tl_content=["first", "second"]),
                Balloon(balloon_type=BalloonType.THINKING, tl_content=["thought"]),
            ],
        )

    def test_lines_without_header_become_dialogue(self) -> None:
        document = TextParser("just some text\nhttp://example.com/page").parse()
        self.assertEqual(
            document.balloons,
            [
                Balloon(balloon_type=BalloonType.DIALOGUE, tl_content=["just some text"]),
                Balloon(balloon_type=BalloonType.DIALOGUE, tl_content=["http://example.com/page"]),
            ],
        )

    def test_leading_separator_and_windows_newlines(self) -> None:
        document = TextParser("//\r\n[]: boxed\r\n//\r\n[]: still boxed\r\n").parse()
        self.assertEqual(
            document.balloons,
            [Balloon(balloon_type=BalloonType.SQUARE, tl_content=["boxed", "still boxed"])],
        )

    def test_render_then_parse_keeps_visible_text(self) -> None:
        original = Document(
            balloons=[
                Balloon(balloon_type=BalloonType.ST, tl_content=["tl"], pr_content=["pr 1", "pr 2"]),
                Balloon(balloon_type=BalloonType.OT, tl_content=["bang"]),
            ]
        )
        parsed = TextParser(TextRenderer().render(original)).parse()
        self.assertEqual(
            parsed.balloons,
            [
                Balloon(balloon_type=BalloonType.ST, tl_content=["pr 1", "pr 2"]),
                Balloon(balloon_type=BalloonType.OT, tl_content=["bang"]),
            ],
        )

    def test_empty_script(self) -> None:
        self.assertEqual(TextParser("\n\n").parse(), Document.new_empty())


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
