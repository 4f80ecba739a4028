# -*- coding: utf-8 -*-
"""
LinkGraph - Connection routing for node-graph editors.

- core: endpoints, links, link registry, curve geometry
- ui: PySide6 items rendering links
"""
