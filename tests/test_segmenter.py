from semidown.stream.events import BlockEvent, EventKind
from semidown.stream.segmenter import BOUNDARY, Segmenter


def _final_texts(events: list[BlockEvent]) -> dict[str, str]:
    """Last update text per block id, in block order."""
    texts: dict[str, str] = {}
    for e in events:
        if e.kind == EventKind.BLOCK_UPDATE:
            texts[e.block_id] = e.text
    return texts


def _run(fragments: list[str]) -> list[BlockEvent]:
    s = Segmenter()
    events = []
    for f in fragments:
        events.extend(s.write(f))
    events.extend(s.end())
    return events


def test_open_block_gets_update_without_close():
    s = Segmenter()
    events = s.write("hello")
    assert [e.kind for e in events] == [EventKind.BLOCK_START, EventKind.BLOCK_UPDATE]
    assert events[1].block_id == "block-1"
    assert events[1].text == "hello"
    assert s.buffered == "hello"


def test_boundary_closes_block():
    s = Segmenter()
    events = s.write("para one\n\npara two")
    assert [e.kind for e in events] == [
        EventKind.BLOCK_START,
        EventKind.BLOCK_UPDATE,
        EventKind.BLOCK_CLOSE,
        EventKind.BLOCK_START,
        EventKind.BLOCK_UPDATE,
    ]
    assert events[1].text == "para one"
    assert events[2].block_id == "block-1"
    assert events[4].block_id == "block-2"
    assert events[4].text == "para two"


def test_updates_are_cumulative():
    s = Segmenter()
    s.write("ab")
    events = s.write("cd")
    assert events == [BlockEvent(EventKind.BLOCK_UPDATE, "block-1", "abcd")]


def test_end_flushes_and_signals_stream_end():
    s = Segmenter()
    s.write("tail")
    events = s.end()
    assert [e.kind for e in events] == [
        EventKind.BLOCK_UPDATE,
        EventKind.BLOCK_CLOSE,
        EventKind.STREAM_END,
    ]
    assert events[0].text == "tail"
    assert s.buffered == ""


def test_end_with_empty_buffer_only_signals_stream_end():
    s = Segmenter()
    s.write("done\n\n")
    assert s.end() == [BlockEvent(kind=EventKind.STREAM_END)]


def test_trailing_boundary_does_not_open_block():
    s = Segmenter()
    events = s.write("done\n\n")
    assert events[-1].kind == EventKind.BLOCK_CLOSE
    assert s.current_block_id is None


def test_boundary_split_across_fragments():
    split = _run(["ab", "cd\n", "\nef"])
    whole = _run(["abcd\n\nef"])
    assert _final_texts(split) == _final_texts(whole) == {"block-1": "abcd", "block-2": "ef"}

    def boundaries(events):
        return [(e.kind, e.block_id) for e in events if e.kind != EventKind.BLOCK_UPDATE]

    assert boundaries(split) == boundaries(whole)


def test_consecutive_boundaries_yield_empty_block():
    events = _run(["a\n\n\n\nb"])
    assert _final_texts(events) == {"block-1": "a", "block-2": "", "block-3": "b"}


def test_single_newlines_stay_in_block():
    events = _run(["line one\nline two\n", "line three"])
    assert _final_texts(events) == {"block-1": "line one\nline two\nline three"}


def test_block_ids_strictly_increase():
    events = _run(["x\n\ny", "\n\nz\n", "\nw\n\n"])
    ids = [int(e.block_id.split("-")[1]) for e in events if e.kind == EventKind.BLOCK_START]
    assert ids == sorted(set(ids))
    assert ids == [1, 2, 3, 4]


def test_close_always_follows_its_own_start():
    events = _run(["a\n\nb\n", "\nc"])
    open_id = None
    for e in events:
        if e.kind == EventKind.BLOCK_START:
            assert open_id is None
            open_id = e.block_id
        elif e.kind == EventKind.BLOCK_CLOSE:
            assert e.block_id == open_id
            open_id = None
    assert open_id is None


def test_conservation_for_any_split():
    text = "# Title\n\nSome *text*\nmore\n\n```py\nx = 1\n\ny = 2\n```\n\nend"
    for size in (1, 2, 3, 5, 7, 13, len(text)):
        fragments = [text[i:i + size] for i in range(0, len(text), size)]
        events = _run(fragments)
        assert BOUNDARY.join(_final_texts(events).values()) == text


def test_conservation_ignores_single_trailing_boundary():
    text = "alpha\n\nbeta\n\n"
    events = _run([text[:4], text[4:9], text[9:]])
    assert BOUNDARY.join(_final_texts(events).values()) + BOUNDARY == text


def test_numbering_continues_after_end():
    s = Segmenter()
    s.write("first")
    s.end()
    events = s.write("second")
    assert events[0] == BlockEvent(kind=EventKind.BLOCK_START, block_id="block-2")


def test_empty_fragment_produces_no_events():
    s = Segmenter()
    assert s.write("") == []
