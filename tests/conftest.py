import os

# Qt items are created without a display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from loguru import logger

from src.linkgraph.core import (
    EndpointDirection, EndpointInfo, LinkRegistry, LinkScene, Node, NodeTemplateRegistry, Point
)


@pytest.fixture
def caplog(caplog):
    """Propagate loguru records to pytest's caplog."""
    handler_id = logger.add(caplog.handler, format="{message}", level=0)
    yield caplog
    logger.remove(handler_id)


@pytest.fixture
def registry():
    return LinkRegistry()


@pytest.fixture
def templates():
    """Number -> Add <- Number, plus a Label taking text only."""
    reg = NodeTemplateRegistry()
    reg.add_template("Number", [
        EndpointInfo(name="value", direction=EndpointDirection.SOURCE, data_type="float"),
    ])
    reg.add_template("Add", [
        EndpointInfo(name="a", direction=EndpointDirection.SINK, data_type="float"),
        EndpointInfo(name="b", direction=EndpointDirection.SINK, data_type="float"),
        EndpointInfo(name="sum", direction=EndpointDirection.SOURCE, data_type="float"),
    ])
    reg.add_template("Label", [
        EndpointInfo(name="text", direction=EndpointDirection.SINK, data_type="str"),
    ])
    return reg


@pytest.fixture
def scene(templates):
    return LinkScene(templates)


@pytest.fixture
def source_node():
    node = Node("Number", name="number", position=Point(0, 0))
    node.add_source("value", data_type="float")
    return node


@pytest.fixture
def sink_node():
    node = Node("Add", name="add", position=Point(300, 0))
    node.add_sink("a", data_type="float")
    node.add_sink("b", data_type="float")
    return node


@pytest.fixture
def text_node():
    node = Node("Label", name="label", position=Point(300, 200))
    node.add_sink("text", data_type="str")
    return node
