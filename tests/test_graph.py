"""End-to-end tests for the design graph with a scripted chat model."""

import asyncio
import json
from unittest.mock import patch

import pytest

from design_lm.errors import MalformedOutputError, TransportError
from design_lm.main import design_new_component, run_design_agent
from design_lm.models import DESIGN_TASK_SLOT, DesignTask
from design_lm.agents.design import (
    attach_design_task,
    compile_design_graph,
    create_design_graph,
    prepare_node,
)


class TestGraphStructure:
    """Tests for the graph definition."""

    def test_nodes_in_order(self):
        graph = create_design_graph()
        assert set(graph.nodes) == {"prepare", "stream", "decode", "attach"}
        assert ("prepare", "stream") in graph.edges
        assert ("stream", "decode") in graph.edges
        assert ("decode", "attach") in graph.edges

    def test_compiles(self):
        assert compile_design_graph() is not None


class TestPrepareNode:
    """Tests for prepare_node."""

    def test_builds_request_parts(self, catalog):
        result = prepare_node({"user_request": "a form", "catalog": catalog})

        assert set(result) == {"output_model", "tool", "messages"}
        assert result["tool"]["function"]["name"] == "design_new_component_api"
        assert len(result["messages"]) == 3
        assert "a form" in result["messages"][2].content


class TestAttachDesignTask:
    """Tests for the context attacher."""

    def _task(self, llm_text: str) -> DesignTask:
        return DesignTask.model_validate({
            "description": {"user": "u", "llm": llm_text},
            "components": [{"name": "Button", "usage": llm_text}],
        })

    def test_writes_slot(self):
        context = {}
        task = self._task("first")
        attach_design_task(context, task)
        assert context[DESIGN_TASK_SLOT] is task

    def test_second_attach_overwrites(self):
        """A second attach fully replaces the first record."""
        context = {}
        attach_design_task(context, self._task("first"))
        attach_design_task(context, self._task("second"))

        stored = context[DESIGN_TASK_SLOT]
        assert stored.description.llm == "second"
        assert "first" not in json.dumps(stored.model_dump())


class TestDesignNewComponent:
    """Tests for the full streamed design run."""

    def test_success_streams_and_attaches(self, catalog, output, make_llm, fragments_of, valid_completion):
        """Output receives every fragment; context receives the decoded task."""
        fragments = fragments_of(valid_completion)
        context = {}

        task = asyncio.run(design_new_component(
            "pricing card", output, context, catalog=catalog, llm=make_llm(fragments),
        ))

        assert output.writes == fragments
        assert output.text == valid_completion
        assert context[DESIGN_TASK_SLOT] == task
        assert task.description.user == "pricing card"
        assert task.description.llm == "A pricing card with a billing period switch"
        assert [c.name for c in task.components] == ["Card", "Switch", "Button"]

    def test_malformed_json_leaves_context_unset(self, catalog, output, make_llm):
        """Broken JSON is streamed to the caller, then raises MalformedOutputError."""
        fragments = ['{"new_component_description": ', '"X", "use_library']
        context = {}

        with pytest.raises(MalformedOutputError):
            asyncio.run(design_new_component(
                "req", output, context, catalog=catalog, llm=make_llm(fragments),
            ))

        assert output.writes == fragments
        assert DESIGN_TASK_SLOT not in context

    def test_unknown_component_leaves_prior_value(self, catalog, output, make_llm):
        """A failed decode does not touch an existing slot value."""
        completion = json.dumps({
            "new_component_description": "X",
            "use_library_components": [
                {"library_component_name": "D", "library_component_usage_reason": "Y"},
            ],
        })
        context = {DESIGN_TASK_SLOT: "previous"}

        with pytest.raises(MalformedOutputError):
            asyncio.run(design_new_component(
                "req", output, context, catalog=catalog, llm=make_llm([completion]),
            ))

        assert context[DESIGN_TASK_SLOT] == "previous"

    def test_transport_failure_mid_stream(self, catalog, output, make_llm):
        """Three fragments then an error: three writes, no decode, no attach."""
        llm = make_llm(["{", '"new_component_description"', ": "], error=ConnectionError("dropped"))
        context = {}

        with patch("design_lm.agents.design.nodes.decode_design_task") as decode:
            with pytest.raises(TransportError):
                asyncio.run(design_new_component("req", output, context, catalog=catalog, llm=llm))

        decode.assert_not_called()
        assert output.writes == ["{", '"new_component_description"', ": "]
        assert DESIGN_TASK_SLOT not in context

    def test_empty_catalog_with_empty_list(self, output, make_llm):
        completion = json.dumps({"new_component_description": "X", "use_library_components": []})
        context = {}

        task = asyncio.run(design_new_component(
            "req", output, context, catalog=[], llm=make_llm([completion]),
        ))

        assert task.components == []
        assert context[DESIGN_TASK_SLOT] == task

    def test_uses_configured_llm_by_default(self, catalog, output, make_llm, valid_completion):
        """Without an explicit model the configured chat model is used."""
        llm = make_llm([valid_completion])

        with patch("design_lm.agents.design.nodes._get_llm", return_value=llm) as get_llm:
            asyncio.run(design_new_component("req", output, {}, catalog=catalog))

        get_llm.assert_called_once()
        llm.bind_tools.assert_called_once()

    def test_bundled_catalog_by_default(self, output, make_llm):
        """Without a catalog the bundled one bounds the schema."""
        completion = json.dumps({
            "new_component_description": "X",
            "use_library_components": [
                {"library_component_name": "Tooltip", "library_component_usage_reason": "Hints"},
            ],
        })

        task = asyncio.run(design_new_component("req", output, {}, llm=make_llm([completion])))

        assert task.components[0].name == "Tooltip"


class TestRunDesignAgent:
    """Tests for the synchronous wrapper."""

    def test_returns_plain_dict(self, catalog, output, make_llm, valid_completion):
        llm = make_llm([valid_completion])

        with patch("design_lm.agents.design.nodes._get_llm", return_value=llm):
            result = run_design_agent("pricing card", output=output, catalog=catalog)

        assert result["description"] == {
            "user": "pricing card",
            "llm": "A pricing card with a billing period switch",
        }
        assert len(result["components"]) == 3
        assert output.text == valid_completion
