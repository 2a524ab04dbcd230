# streamshelf/tests/test_store.py
import json
import threading

import pytest

from streamshelf.repositories.base import JsonRepository
from streamshelf.store import JsonFileStore, MemoryStore, read_json, write_json


def test_read_missing_file_creates_empty_array(tmp_path):
    assert read_json("db/users.json", tmp_path) == []
    created = tmp_path / "db" / "users.json"
    assert created.exists()
    assert json.loads(created.read_text(encoding="utf-8")) == []
    # and reading it again still yields []
    assert read_json("db/users.json", tmp_path) == []


def test_empty_file_reads_as_empty_array(tmp_path):
    (tmp_path / "shows.json").write_text("", encoding="utf-8")
    assert read_json("shows.json", tmp_path) == []


def test_corrupt_file_propagates(tmp_path):
    (tmp_path / "shows.json").write_text("{not json", encoding="utf-8")
    with pytest.raises(json.JSONDecodeError):
        read_json("shows.json", tmp_path)


def test_write_then_read_roundtrip(tmp_path):
    rows = [
        {"id": "1", "title": "O Cavaleiro das Trevas", "season": None, "genres": ["Ação", "Crime"]},
        {"id": "2", "nested": {"a": [1, 2.5, True]}},
    ]
    write_json("nested/dir/shows.json", rows, tmp_path)
    assert read_json("nested/dir/shows.json", tmp_path) == rows


def test_write_is_pretty_printed_utf8(tmp_path):
    write_json("shows.json", [{"title": "Ação"}], tmp_path)
    text = (tmp_path / "shows.json").read_text(encoding="utf-8")
    assert text.startswith("[\n  {")
    assert "Ação" in text


def test_write_overwrites_whole_file_and_leaves_no_temp_files(tmp_path):
    write_json("shows.json", [1, 2, 3], tmp_path)
    write_json("shows.json", [4], tmp_path)
    assert read_json("shows.json", tmp_path) == [4]
    assert [p.name for p in tmp_path.iterdir()] == ["shows.json"]


def test_memory_store_hands_out_copies():
    store = MemoryStore({"shows.json": [{"id": "a"}]})
    rows = store.load("shows.json")
    rows[0]["id"] = "mutated"
    rows.append({"id": "b"})
    assert store.load("shows.json") == [{"id": "a"}]


class _Counter(JsonRepository):
    name = "counter.json"


@pytest.mark.parametrize("make_store", [lambda p: JsonFileStore(p), lambda p: MemoryStore()])
def test_locked_read_modify_write_loses_no_updates(tmp_path, make_store):
    repo = _Counter(make_store(tmp_path))
    threads_n, per_thread = 8, 25

    def worker(n):
        for i in range(per_thread):
            with repo.editing() as rows:
                rows.append({"t": n, "i": i})

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(threads_n)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(repo.all()) == threads_n * per_thread


def test_editing_does_not_save_when_body_raises(tmp_path):
    repo = _Counter(JsonFileStore(tmp_path))
    with repo.editing() as rows:
        rows.append({"id": 1})

    with pytest.raises(RuntimeError):
        with repo.editing() as rows:
            rows.append({"id": 2})
            raise RuntimeError("boom")

    assert repo.all() == [{"id": 1}]
