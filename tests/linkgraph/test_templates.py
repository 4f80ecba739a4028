# -*- coding: utf-8 -*-
"""
Tests for NodeTemplateRegistry
"""
import pytest
from pydantic import ValidationError

from src.linkgraph.core.endpoint import EndpointDirection
from src.linkgraph.core.geometry import Point
from src.linkgraph.core.templates import EndpointInfo, NodeTemplateRegistry


class TestTemplateRegistration:

    def test_add_template(self, templates):
        assert templates.has_template("Add")
        assert templates.template_names == ["Add", "Label", "Number"]
        assert len(templates) == 3

    def test_duplicate_refused(self, templates, caplog):
        accepted = templates.add_template("Add", [
            EndpointInfo(name="only", direction=EndpointDirection.SINK),
        ])
        assert accepted is False
        assert [e.name for e in templates.get_template("Add").endpoints] == ["a", "b", "sum"]
        assert "already exists" in caplog.text

    def test_independent_registries(self):
        """No shared state between registries."""
        first = NodeTemplateRegistry()
        second = NodeTemplateRegistry()
        first.add_template("X", [])
        assert not second.has_template("X")

    def test_endpoint_info_validation(self):
        info = EndpointInfo(name="v", direction="source")
        assert info.direction is EndpointDirection.SOURCE
        assert info.data_type == "any"
        with pytest.raises(ValidationError):
            EndpointInfo(name="v", direction="sideways")


class TestCreateNode:

    def test_create_node(self, templates):
        node = templates.create_node("Add", name="add1", stage="math", position=Point(10, 20))

        assert node.type_name == "Add"
        assert node.name == "add1"
        assert node.stage == "math"
        assert node.position == Point(10, 20)
        assert set(node.sinks) == {"a", "b"}
        assert set(node.sources) == {"sum"}
        assert node.get_sink("b").data_type == "float"
        assert node.get_sink("a").node is node

    def test_unknown_type(self, templates, caplog):
        assert templates.create_node("Nope", name="n") is None
        assert "unknown" in caplog.text

    def test_instances_are_independent(self, templates):
        a = templates.create_node("Number")
        b = templates.create_node("Number")
        assert a.node_id != b.node_id
        assert a.get_source("value") is not b.get_source("value")
        assert a.name == "Number"
