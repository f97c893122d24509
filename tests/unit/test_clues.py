"""Unit tests for the clue stack."""

import pytest

from softassert.clues import ClueStack
from softassert.errors import EmptyClueStackError


class TestClueStack:
    """Test ClueStack ordering and rendering."""

    def test_empty_stack_renders_empty_string(self):
        stack = ClueStack()
        assert stack.render() == ""
        assert stack.context() == ()
        assert not stack

    def test_render_reads_outer_before_inner(self):
        stack = ClueStack()
        stack.push(lambda: "A")
        stack.push(lambda: "B")

        assert stack.render() == "A\nB\n"

    def test_context_is_in_push_order(self):
        outer = lambda: "outer"  # noqa: E731
        inner = lambda: "inner"  # noqa: E731
        stack = ClueStack()
        stack.push(outer)
        stack.push(inner)

        assert stack.context() == (outer, inner)

    def test_pop_removes_most_recent(self):
        stack = ClueStack()
        stack.push(lambda: "A")
        stack.push(lambda: "B")

        stack.pop()

        assert stack.render() == "A\n"
        assert len(stack) == 1

    def test_pop_empty_raises(self):
        stack = ClueStack()
        with pytest.raises(EmptyClueStackError):
            stack.pop()

    def test_empty_stack_error_is_index_error(self):
        """Callers guarding with IndexError also catch the empty stack case."""
        with pytest.raises(IndexError):
            ClueStack().pop()

    def test_clues_are_evaluated_lazily(self):
        calls = []

        def clue():
            calls.append("called")
            return "lazy"

        stack = ClueStack()
        stack.push(clue)
        assert calls == []

        assert stack.render() == "lazy\n"
        assert calls == ["called"]

    def test_each_render_reevaluates(self):
        state = {"value": 1}
        stack = ClueStack()
        stack.push(lambda: f"value={state['value']}")

        assert stack.render() == "value=1\n"
        state["value"] = 2
        assert stack.render() == "value=2\n"
