import pytest

from uiassets.core.errors import CircularTaskError, UnknownTaskError
from uiassets.core.tasks.graph import TaskGraph, TaskNode
from uiassets.core.tasks.runner import default_graph


def test_graph_respects_depends_on():
    g = TaskGraph()

    g.add_node(TaskNode(name="A", depends_on=[]))
    g.add_node(TaskNode(name="B", depends_on=["A"]))
    g.add_node(TaskNode(name="C", depends_on=["B"]))

    order = g.execution_order(["C"])

    assert order == ["A", "B", "C"]


def test_shared_prerequisite_runs_once():
    g = TaskGraph()
    g.add_node(TaskNode(name="setup"))
    g.add_node(TaskNode(name="x", depends_on=["setup"]))
    g.add_node(TaskNode(name="y", depends_on=["setup"]))

    assert g.execution_order(["x", "y", "x"]) == ["setup", "x", "y"]


def test_graph_detects_circular_dependency():
    g = TaskGraph()

    g.add_node(TaskNode(name="A", depends_on=["C"]))
    g.add_node(TaskNode(name="B", depends_on=["A"]))
    g.add_node(TaskNode(name="C", depends_on=["B"]))

    with pytest.raises(CircularTaskError) as exc:
        g.execution_order(["A"])
    assert "A => C => B => A" in str(exc.value)


def test_unknown_task():
    with pytest.raises(UnknownTaskError):
        TaskGraph().execution_order(["nope"])


def test_default_task_cleans_before_generating():
    order = default_graph().execution_order(["default"])
    assert order == ["clean", "submodule", "javascripts", "stylesheets", "images", "manifest", "assets", "default"]


def test_build_is_an_alias_for_assets():
    assert default_graph().execution_order(["build"])[-2:] == ["assets", "build"]


def test_listed_tasks_have_descriptions():
    names = [n.name for n in default_graph().described()]
    assert names == sorted(names)
    assert {"clean", "javascripts", "stylesheets", "images", "assets"} <= set(names)
    assert "submodule" not in names
