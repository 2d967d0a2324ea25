"""
处理会话测试

被测模块: src/data/memory.py, src/data/directory.py, src/data/factory.py

测试类/函数清单:
    TestInMemoryProcessSession                 内存会话测试
        test_get_fifo                          验证按入队顺序取出
        test_get_empty                         验证空会话返回 None
        test_read_write                        验证 write 返回新记录且原记录不变
        test_transfer_once                     验证同一记录只能转移一次
        test_transfer_unknown_record           验证拒绝不属于会话的记录
        test_transfer_invalid_outcome          验证拒绝未知路由
        test_read_foreign_record               验证拒绝读取未取出的记录
        test_counts                            验证计数
    TestDirectoryProcessSession                目录会话测试
        test_loads_sorted_files                验证按文件名排序加载并跳过子目录
        test_missing_input_dir                 验证输入目录不存在报错
        test_commit_layout                     验证 success/failure 目录与 errors 目录
        test_error_file_does_not_clobber_input_named_like_it 验证错误信息不覆盖同名输入文件
    TestCreateSession                          会话工厂测试
        test_directory                         验证创建目录会话
        test_memory                            验证创建内存会话
        test_missing_dirs                      验证缺少目录配置报错
        test_unknown_type                      验证未知类型报错
"""

import json

import pytest

from src.data import DirectoryProcessSession, InMemoryProcessSession, create_session
from src.models.errors import ConfigError
from src.models.record import Outcome, Record


class TestInMemoryProcessSession:
    """内存会话测试"""

    def test_get_fifo(self):
        first, second = Record(content=b"1"), Record(content=b"2")
        session = InMemoryProcessSession([first])
        session.enqueue(second)

        assert session.get() is first
        assert session.get() is second
        assert session.has_pending() is False

    def test_get_empty(self):
        assert InMemoryProcessSession().get() is None

    def test_read_write(self):
        record = Record(content=b"old", attributes={"filename": "a.txt"})
        session = InMemoryProcessSession([record])
        taken = session.get()

        updated = session.write(taken, b"new")

        assert session.read(taken) == b"old"
        assert updated.content == b"new"
        assert updated.record_id == record.record_id
        assert updated.attributes == {"filename": "a.txt"}

    def test_transfer_once(self):
        session = InMemoryProcessSession([Record(content=b"x")])
        record = session.get()

        session.transfer(record, Outcome.SUCCESS)

        with pytest.raises(ValueError, match="已转移"):
            session.transfer(record, Outcome.FAILURE)
        assert session.count(Outcome.SUCCESS) == 1
        assert session.count(Outcome.FAILURE) == 0

    def test_transfer_unknown_record(self):
        session = InMemoryProcessSession()

        with pytest.raises(ValueError, match="不属于当前会话"):
            session.transfer(Record(content=b"x"), Outcome.SUCCESS)

    def test_transfer_invalid_outcome(self):
        session = InMemoryProcessSession([Record(content=b"x")])
        record = session.get()

        with pytest.raises(ValueError, match="未知路由"):
            session.transfer(record, "retry")

        assert session.in_flight_count() == 1

    def test_read_foreign_record(self):
        record = Record(content=b"x")
        session = InMemoryProcessSession([record])

        with pytest.raises(ValueError):
            session.read(record)

    def test_counts(self):
        session = InMemoryProcessSession([Record(content=b"a"), Record(content=b"b")])
        assert session.pending_count() == 2

        record = session.get()
        assert session.pending_count() == 1
        assert session.in_flight_count() == 1

        session.transfer(record, Outcome.FAILURE)
        assert session.in_flight_count() == 0
        assert session.count(Outcome.FAILURE) == 1


class TestDirectoryProcessSession:
    """目录会话测试"""

    def test_loads_sorted_files(self, tmp_path):
        input_dir = tmp_path / "input"
        input_dir.mkdir()
        (input_dir / "b.txt").write_bytes(b"bee")
        (input_dir / "a.txt").write_bytes(b"ay")
        (input_dir / "nested").mkdir()

        session = DirectoryProcessSession(input_dir, tmp_path / "output")

        assert session.pending_count() == 2
        first = session.get()
        assert first.attributes["filename"] == "a.txt"
        assert first.content == b"ay"

    def test_missing_input_dir(self, tmp_path):
        with pytest.raises(ConfigError, match="输入目录不存在"):
            DirectoryProcessSession(tmp_path / "nope", tmp_path / "output")

    def test_commit_layout(self, tmp_path):
        input_dir = tmp_path / "input"
        output_dir = tmp_path / "output"
        input_dir.mkdir()
        (input_dir / "good.txt").write_bytes(b"Translate: hola")
        (input_dir / "bad.txt").write_bytes(b"ping")

        session = DirectoryProcessSession(input_dir, output_dir)
        bad = session.get()
        good = session.get()
        session.transfer(session.write(good, b"hello"), Outcome.SUCCESS)
        session.transfer(
            bad.with_attributes(
                **{"openai.error.type": "remote_rejection", "openai.error.message": "Internal Server Error"}
            ),
            Outcome.FAILURE,
        )

        written = session.commit()

        assert written == {Outcome.SUCCESS: 1, Outcome.FAILURE: 1}
        assert (output_dir / "success" / "good.txt").read_bytes() == b"hello"
        assert (output_dir / "failure" / "bad.txt").read_bytes() == b"ping"
        assert not (output_dir / "errors" / "good.txt.error.json").exists()
        assert sorted(p.name for p in (output_dir / "failure").iterdir()) == ["bad.txt"]
        error = json.loads((output_dir / "errors" / "bad.txt.error.json").read_text(encoding="utf-8"))
        assert error == {"type": "remote_rejection", "message": "Internal Server Error"}

    def test_error_file_does_not_clobber_input_named_like_it(self, tmp_path):
        input_dir = tmp_path / "input"
        output_dir = tmp_path / "output"
        input_dir.mkdir()
        (input_dir / "a.txt").write_bytes(b"first")
        (input_dir / "a.txt.error.json").write_bytes(b"second")

        session = DirectoryProcessSession(input_dir, output_dir)
        for _ in range(2):
            record = session.get()
            session.transfer(
                record.with_attributes(**{"openai.error.type": "transport_error"}), Outcome.FAILURE
            )

        session.commit()

        assert (output_dir / "failure" / "a.txt").read_bytes() == b"first"
        assert (output_dir / "failure" / "a.txt.error.json").read_bytes() == b"second"
        assert json.loads((output_dir / "errors" / "a.txt.error.json").read_text(encoding="utf-8")) == {
            "type": "transport_error"
        }


class TestCreateSession:
    """会话工厂测试"""

    def test_directory(self, sample_config, tmp_path):
        (tmp_path / "input").mkdir()

        session = create_session(sample_config)

        assert isinstance(session, DirectoryProcessSession)
        assert session.output_dir == tmp_path / "output"

    def test_memory(self):
        session = create_session({"runner": {"type": " Memory "}})

        assert type(session) is InMemoryProcessSession
        assert session.has_pending() is False

    def test_missing_dirs(self):
        with pytest.raises(ConfigError, match="input_dir"):
            create_session({"runner": {"type": "directory", "input_dir": "  "}})

    def test_unknown_type(self):
        with pytest.raises(ConfigError, match="不支持的会话类型"):
            create_session({"runner": {"type": "kafka"}})
