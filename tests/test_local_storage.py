import asyncio

import pytest

from gate_ai.core.exceptions import NoteSinkError
from gate_ai.services.storage import LocalNoteSink, NoteSinkFactory, sanitize_filename


def test_sanitize_filename():
    assert sanitize_filename('a/b\\c:d*e?f"g<h>i|j') == "a-b-c-d-e-f-g-h-i-j"
    assert sanitize_filename("  many   spaces\there ") == "many spaces here"
    assert sanitize_filename("") == "Untitled"
    assert sanitize_filename("   ") == "Untitled"
    assert len(sanitize_filename("x" * 300)) == 100


def test_save_note(tmp_path):
    sink = LocalNoteSink(base_dir=tmp_path / "AI")
    path = asyncio.run(sink.save_note("Synthesis: A/B", "# Note\nbody"))
    assert path == "Synthesis- A-B.md"
    assert (tmp_path / "AI" / path).read_text(encoding="utf-8") == "# Note\nbody"


def test_duplicate_titles_get_suffix(tmp_path):
    sink = LocalNoteSink(base_dir=tmp_path)

    async def save_three():
        return [await sink.save_note("Digest", f"v{i}") for i in range(3)]

    paths = asyncio.run(save_three())
    assert paths == ["Digest.md", "Digest (1).md", "Digest (2).md"]
    assert (tmp_path / "Digest.md").read_text(encoding="utf-8") == "v0"


def test_unicode_content(tmp_path):
    sink = LocalNoteSink(base_dir=tmp_path)
    path = asyncio.run(sink.save_note("한국어 노트", "내용 ✓"))
    assert (tmp_path / path).read_text(encoding="utf-8") == "내용 ✓"


def test_write_failure_raises_note_sink_error(tmp_path):
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("file")
    sink = LocalNoteSink(base_dir=blocker)
    with pytest.raises(NoteSinkError):
        asyncio.run(sink.save_note("Title", "content"))


def test_factory(tmp_path):
    sink = NoteSinkFactory.create("local", base_dir=str(tmp_path))
    assert isinstance(sink, LocalNoteSink)
    assert sink.base_dir == tmp_path
    with pytest.raises(ValueError):
        NoteSinkFactory.create("s3")


def test_unencodable_content_leaves_no_partial_file(tmp_path):
    sink = LocalNoteSink(base_dir=tmp_path)
    with pytest.raises(NoteSinkError):
        asyncio.run(sink.save_note("Broken", "ok \ud800 done"))
    assert list(tmp_path.iterdir()) == []


def test_factory_sink_is_ready_without_setup(tmp_path):
    sink = NoteSinkFactory.create("local", base_dir=tmp_path / "vault" / "AI")
    assert not hasattr(sink, "initialize")
    path = asyncio.run(sink.save_note("First", "content"))
    assert (tmp_path / "vault" / "AI" / path).is_file()
