import sys
from PySide6.QtWidgets import QApplication, QMainWindow
from loguru import logger

from src.core.config import ConfigManager
from src.core.logging import setup_logging
from src.linkgraph.core import (
    EndpointDirection, EndpointInfo, LinkScene, NodeTemplateRegistry, Point
)
from src.linkgraph.ui import GraphView


def build_templates() -> NodeTemplateRegistry:
    templates = NodeTemplateRegistry()
    templates.add_template("Number", [
        EndpointInfo(name="value", direction=EndpointDirection.SOURCE, data_type="float"),
    ])
    templates.add_template("Text", [
        EndpointInfo(name="text", direction=EndpointDirection.SOURCE, data_type="str"),
    ])
    templates.add_template("Add", [
        EndpointInfo(name="a", direction=EndpointDirection.SINK, data_type="float"),
        EndpointInfo(name="b", direction=EndpointDirection.SINK, data_type="float"),
        EndpointInfo(name="sum", direction=EndpointDirection.SOURCE, data_type="float"),
    ])
    templates.add_template("Print", [
        EndpointInfo(name="message", direction=EndpointDirection.SINK, data_type="any"),
    ])
    return templates


def build_demo_scene(scene: LinkScene) -> None:
    x = scene.create_node("Number", name="x", position=Point(-320, -120))
    y = scene.create_node("Number", name="y", position=Point(-320, 40))
    scene.create_node("Text", name="label", position=Point(-320, 180))
    add = scene.create_node("Add", name="add", position=Point(-60, -40))
    out = scene.create_node("Print", name="print", position=Point(200, 20))

    scene.connect(x.get_source("value"), add.get_sink("a"))
    scene.connect(y.get_source("value"), add.get_sink("b"))
    scene.connect(add.get_source("sum"), out.get_sink("message"))


def main():
    config = ConfigManager("config.json")
    setup_logging(config.data.general.debug_mode, config.data.general.log_dir)

    app = QApplication(sys.argv)

    scene = LinkScene(build_templates(), settings=config.data.routing)
    build_demo_scene(scene)
    logger.info(f"Demo scene ready: {scene}")

    window = QMainWindow()
    window.setWindowTitle("LinkGraph")
    window.setCentralWidget(GraphView(scene, style=config.data.link_style))
    window.resize(1000, 640)
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
