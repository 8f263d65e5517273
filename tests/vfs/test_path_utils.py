#!/usr/bin/env python3
"""
Unit тесты для path_utils.py
"""

import pytest

from vfs_tools_mcp.vfs.errors import NotFoundError
from vfs_tools_mcp.vfs.nodes import DirectoryNode, FileNode
from vfs_tools_mcp.vfs.path_utils import normalize_path, resolve_node, split_path


class TestPathUtils:
    """Тесты для функций работы с путями"""

    @pytest.mark.parametrize(
        "path, expected",
        [
            ("/", []),
            ("", []),
            ("/src/App.tsx", ["src", "App.tsx"]),
            ("src//App.tsx/", ["src", "App.tsx"]),
            ("/a/../b", ["a", "..", "b"]),
        ],
    )
    def test_split_path(self, path, expected):
        """Тест разбиения пути на сегменты"""
        assert split_path(path) == expected

    def test_normalize_path(self):
        """Тест нормализации пути"""
        assert normalize_path("src//App.tsx/") == "/src/App.tsx"
        assert normalize_path("") == "/"

    def test_resolve_node(self):
        """Тест обхода дерева"""
        app = FileNode(content="app")
        src = DirectoryNode(children={"App.tsx": app})
        root = DirectoryNode(children={"src": src})

        assert resolve_node(root, []) is root
        assert resolve_node(root, ["src", "App.tsx"]) is app

    def test_resolve_missing_segment(self):
        """Тест отсутствующего сегмента"""
        root = DirectoryNode(children={"src": DirectoryNode()})
        with pytest.raises(NotFoundError) as exc_info:
            resolve_node(root, ["src", "missing", "deeper"])
        assert exc_info.value.path == "/src/missing"
