# -*- coding: utf-8 -*-
"""
Node Templates - Blueprints for creating nodes with their endpoints.

The template registry is an ordinary object constructed by the editor and
passed to whoever creates nodes; there is no process-wide instance.

Example:
    templates = NodeTemplateRegistry()
    templates.add_template("Add", [
        EndpointInfo(name="a", direction=EndpointDirection.SINK, data_type="int"),
        EndpointInfo(name="b", direction=EndpointDirection.SINK, data_type="int"),
        EndpointInfo(name="sum", direction=EndpointDirection.SOURCE, data_type="int"),
    ])
    node = templates.create_node("Add", name="add1", position=Point(40, 40))
"""
from typing import Dict, List, Optional, Sequence

from loguru import logger
from pydantic import BaseModel, Field

from .endpoint import ANY_TYPE, EndpointDirection
from .geometry import Point
from .node import Node


class EndpointInfo(BaseModel):
    """
    Description of one endpoint of a template.

    Attributes:
        name: Endpoint name
        direction: SOURCE or SINK
        data_type: Type tag for compatibility checks
    """
    name: str
    direction: EndpointDirection
    data_type: str = ANY_TYPE


class NodeTemplate(BaseModel):
    """A node type and the endpoints every instance gets."""
    type_name: str
    endpoints: List[EndpointInfo] = Field(default_factory=list)


class NodeTemplateRegistry:
    """
    Registry of node templates, keyed by type name.

    The first registration of a type wins; later ones are refused.
    """

    def __init__(self):
        self._templates: Dict[str, NodeTemplate] = {}

    def add_template(self, type_name: str, endpoints: Sequence[EndpointInfo]) -> bool:
        """
        Register a node type.

        Returns:
            False if the type is already registered
        """
        if type_name in self._templates:
            logger.warning(f"Can't add template: type '{type_name}' already exists")
            return False
        self._templates[type_name] = NodeTemplate(type_name=type_name, endpoints=list(endpoints))
        logger.debug(f"Registered node template: {type_name}")
        return True

    def get_template(self, type_name: str) -> Optional[NodeTemplate]:
        return self._templates.get(type_name)

    def has_template(self, type_name: str) -> bool:
        return type_name in self._templates

    @property
    def template_names(self) -> List[str]:
        return sorted(self._templates)

    def create_node(
        self,
        type_name: str,
        name: str = "",
        stage: str = "",
        position: Point = Point()
    ) -> Optional[Node]:
        """
        Instantiate a node of ``type_name`` with its endpoints.

        Returns:
            The new node, or None if the type is unknown
        """
        template = self._templates.get(type_name)
        if template is None:
            logger.warning(f"Can't create node '{name}': type '{type_name}' is unknown")
            return None

        node = Node(type_name, name=name, stage=stage, position=position)
        for info in template.endpoints:
            if info.direction is EndpointDirection.SOURCE:
                node.add_source(info.name, data_type=info.data_type)
            else:
                node.add_sink(info.name, data_type=info.data_type)
        return node

    def __len__(self) -> int:
        return len(self._templates)
