#!/usr/bin/env python3
"""
Unit тесты для edit_engine.py
"""

import pytest

from vfs_tools_mcp.vfs import (
    AlreadyExistsError,
    AmbiguousMatchError,
    EditEngine,
    InvalidLineNumberError,
    InvalidViewRangeError,
    IsDirectoryError,
    NoHistoryError,
    NoMatchError,
    NodeType,
    NotFoundError,
    VirtualFileSystem,
)


class TestEditEngine:
    """Тесты для EditEngine"""

    @pytest.fixture
    def vfs(self):
        """Создает VirtualFileSystem с файлом /src/App.tsx"""
        vfs = VirtualFileSystem()
        vfs.write("/src/App.tsx", "const x = 1;")
        return vfs

    @pytest.fixture
    def engine(self, vfs):
        """Создает экземпляр EditEngine"""
        return EditEngine(vfs)

    def test_str_replace_single_occurrence(self, engine, vfs):
        """Тест замены единственного вхождения"""
        result = engine.str_replace("/src/App.tsx", "x = 1", "x = 2")
        assert vfs.read("/src/App.tsx") == "const x = 2;"
        assert result.content == "const x = 2;"
        assert vfs.history("/src/App.tsx") == ["const x = 1;"]

    def test_str_replace_changes_length_by_difference(self, engine, vfs):
        """Тест изменения длины содержимого"""
        before = vfs.read("/src/App.tsx")
        engine.str_replace("/src/App.tsx", "1", "12345")
        assert len(vfs.read("/src/App.tsx")) == len(before) + len("12345") - len("1")

    def test_str_replace_without_new_str_deletes(self, engine, vfs):
        """Тест удаления строки при отсутствии new_str"""
        engine.str_replace("/src/App.tsx", " = 1")
        assert vfs.read("/src/App.tsx") == "const x;"

    def test_str_replace_no_match(self, engine, vfs):
        """Тест отсутствия совпадений"""
        with pytest.raises(NoMatchError) as exc_info:
            engine.str_replace("/src/App.tsx", "y = 1", "y = 2")
        assert exc_info.value.kind == "NoMatch"
        assert vfs.read("/src/App.tsx") == "const x = 1;"
        assert vfs.history("/src/App.tsx") == []

    def test_str_replace_empty_old_str(self, engine):
        """Тест пустой old_str"""
        with pytest.raises(NoMatchError):
            engine.str_replace("/src/App.tsx", "", "x")

    def test_str_replace_ambiguous(self, engine, vfs):
        """Тест неоднозначного совпадения"""
        vfs.write("/dup.txt", "foo\nbar\nfoo")
        with pytest.raises(AmbiguousMatchError) as exc_info:
            engine.str_replace("/dup.txt", "foo", "baz")
        assert exc_info.value.lines == [1, 3]
        assert vfs.read("/dup.txt") == "foo\nbar\nfoo"

    def test_str_replace_overlapping_occurrences(self, engine, vfs):
        """Тест перекрывающихся вхождений"""
        vfs.write("/a.txt", "aaa")
        with pytest.raises(AmbiguousMatchError) as exc_info:
            engine.str_replace("/a.txt", "aa", "b")
        assert exc_info.value.lines == [1, 1]
        assert vfs.read("/a.txt") == "aaa"
        assert vfs.history("/a.txt") == []

    def test_str_replace_is_exact(self, engine, vfs):
        """Тест точного совпадения без нормализации пробелов"""
        vfs.write("/tabs.txt", "\tindented")
        with pytest.raises(NoMatchError):
            engine.str_replace("/tabs.txt", "        indented", "x")

    def test_str_replace_missing_file(self, engine):
        """Тест замены в несуществующем файле"""
        with pytest.raises(NotFoundError):
            engine.str_replace("/nope.txt", "a", "b")

    def test_str_replace_snippet(self, engine, vfs):
        """Тест фрагмента вокруг правки"""
        vfs.write("/long.txt", "\n".join(f"line {i}" for i in range(1, 21)))
        result = engine.str_replace("/long.txt", "line 10", "line ten")
        assert result.snippet_start_line == 6
        assert result.snippet.splitlines()[0] == "line 6"
        assert "line ten" in result.snippet
        assert result.snippet.splitlines()[-1] == "line 14"

    def test_insert_at_beginning(self, engine, vfs):
        """Тест вставки в начало файла"""
        vfs.write("/f.txt", "a\nb")
        engine.insert("/f.txt", 0, "first")
        assert vfs.read("/f.txt") == "first\na\nb"

    def test_insert_in_middle(self, engine, vfs):
        """Тест вставки в середину файла"""
        vfs.write("/f.txt", "a\nb")
        engine.insert("/f.txt", 1, "middle")
        assert vfs.read("/f.txt") == "a\nmiddle\nb"

    def test_insert_at_end(self, engine, vfs):
        """Тест вставки в конец файла"""
        vfs.write("/f.txt", "a\nb")
        engine.insert("/f.txt", 2, "last")
        assert vfs.read("/f.txt") == "a\nb\nlast"

    def test_insert_multiple_lines(self, engine, vfs):
        """Тест вставки нескольких строк"""
        vfs.write("/f.txt", "a\nd")
        engine.insert("/f.txt", 1, "b\nc")
        assert vfs.read("/f.txt") == "a\nb\nc\nd"

    def test_insert_into_empty_file(self, engine, vfs):
        """Тест вставки в пустой файл"""
        vfs.write("/empty.txt", "")
        engine.insert("/empty.txt", 0, "hello")
        assert vfs.read("/empty.txt") == "hello"

    @pytest.mark.parametrize("line", [-1, 3])
    def test_insert_invalid_line(self, engine, vfs, line):
        """Тест недопустимого номера строки"""
        vfs.write("/f.txt", "a\nb")
        with pytest.raises(InvalidLineNumberError):
            engine.insert("/f.txt", line, "x")
        assert vfs.read("/f.txt") == "a\nb"

    def test_insert_pushes_history(self, engine, vfs):
        """Тест сохранения истории при вставке"""
        engine.insert("/src/App.tsx", 0, "// header")
        assert vfs.history("/src/App.tsx") == ["const x = 1;"]

    def test_view_file(self, engine):
        """Тест просмотра файла"""
        result = engine.view("/src/App.tsx")
        assert result.content == "const x = 1;"
        assert result.init_line == 1
        assert not result.is_directory

    def test_view_range(self, engine, vfs):
        """Тест просмотра диапазона строк"""
        vfs.write("/f.txt", "1\n2\n3\n4\n5")
        result = engine.view("/f.txt", [2, 4])
        assert result.content == "2\n3\n4"
        assert result.init_line == 2

    def test_view_range_to_end(self, engine, vfs):
        """Тест просмотра до конца файла"""
        vfs.write("/f.txt", "1\n2\n3")
        assert engine.view("/f.txt", [2, -1]).content == "2\n3"

    @pytest.mark.parametrize("view_range", [[0, 1], [1, 10], [3, 2], [1, 2, 3]])
    def test_view_invalid_range(self, engine, vfs, view_range):
        """Тест недопустимого диапазона"""
        vfs.write("/f.txt", "1\n2\n3")
        with pytest.raises(InvalidViewRangeError):
            engine.view("/f.txt", view_range)

    def test_view_directory(self, engine, vfs):
        """Тест просмотра директории"""
        vfs.mkdir("/src/components")
        result = engine.view("/src")
        assert result.is_directory
        assert result.entries == [("App.tsx", NodeType.FILE), ("components", NodeType.DIRECTORY)]

    def test_view_directory_with_range(self, engine):
        """Тест диапазона для директории"""
        with pytest.raises(InvalidViewRangeError):
            engine.view("/src", [1, 2])

    def test_view_missing(self, engine):
        """Тест просмотра несуществующего пути"""
        with pytest.raises(NotFoundError):
            engine.view("/missing.tsx")

    def test_create(self, engine, vfs):
        """Тест создания файла"""
        result = engine.create("/components/Card.tsx", "card")
        assert result.path == "/components/Card.tsx"
        assert vfs.read("/components/Card.tsx") == "card"
        assert vfs.history("/components/Card.tsx") == []

    def test_create_twice_fails(self, engine, vfs):
        """Тест повторного создания файла"""
        engine.create("/a.txt", "a")
        with pytest.raises(AlreadyExistsError):
            engine.create("/a.txt", "b")
        assert vfs.read("/a.txt") == "a"

        vfs.write("/a.txt", "b")
        assert vfs.read("/a.txt") == "b"

    def test_create_over_directory_fails(self, engine):
        """Тест создания поверх директории"""
        with pytest.raises(AlreadyExistsError):
            engine.create("/src", "x")

    def test_undo_restores_previous_content(self, engine, vfs):
        """Тест отмены правки"""
        vfs.write("/src/App.tsx", "const x = 2;")
        result = engine.undo_edit("/src/App.tsx")
        assert result.content == "const x = 1;"
        assert vfs.read("/src/App.tsx") == "const x = 1;"

    def test_undo_without_history(self, engine, vfs):
        """Тест отмены без истории"""
        vfs.write("/src/App.tsx", "const x = 2;")
        engine.undo_edit("/src/App.tsx")
        with pytest.raises(NoHistoryError):
            engine.undo_edit("/src/App.tsx")

    def test_undo_walks_back_in_steps(self, engine, vfs):
        """Тест последовательной отмены"""
        engine.str_replace("/src/App.tsx", "1", "2")
        engine.str_replace("/src/App.tsx", "2", "3")
        engine.undo_edit("/src/App.tsx")
        assert vfs.read("/src/App.tsx") == "const x = 2;"
        engine.undo_edit("/src/App.tsx")
        assert vfs.read("/src/App.tsx") == "const x = 1;"

    def test_undo_missing_file(self, engine):
        """Тест отмены для несуществующего файла"""
        with pytest.raises(NotFoundError):
            engine.undo_edit("/nope.txt")

    def test_undo_directory(self, engine):
        """Тест отмены для директории"""
        with pytest.raises(IsDirectoryError):
            engine.undo_edit("/src")
