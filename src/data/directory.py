"""
目录处理会话

把输入目录中的每个普通文件加载为一条记录 (filename 属性保存文件名)，
处理完成后 commit() 把记录写到 <output_dir>/<路由>/<filename>。
失败记录的错误信息另存为 <output_dir>/errors/<filename>.error.json，
与路由目录分开，不会和同名的输入文件冲突。

目录结构:
    input/                    output/
    ├── a.txt        ──→      ├── success/
    └── b.txt                 │   └── a.txt      (生成文本)
                              ├── failure/
                              │   └── b.txt      (原始内容)
                              └── errors/
                                  └── b.txt.error.json
"""

import json
import logging
from pathlib import Path

from ..models.errors import ConfigError
from ..models.record import Outcome, Record
from .memory import InMemoryProcessSession

ERROR_ATTRIBUTE_PREFIX = "openai.error."
ERRORS_DIR = "errors"


class DirectoryProcessSession(InMemoryProcessSession):
    """
    目录处理会话

    Attributes:
        input_dir: 输入目录
        output_dir: 输出目录
    """

    def __init__(self, input_dir: str | Path, output_dir: str | Path):
        """
        初始化会话并加载输入目录下的全部文件

        Args:
            input_dir: 输入目录
            output_dir: 输出目录 (commit 时创建)

        Raises:
            ConfigError: 输入目录不存在
        """
        self.input_dir = Path(input_dir)
        self.output_dir = Path(output_dir)

        if not self.input_dir.is_dir():
            raise ConfigError(f"输入目录不存在: {self.input_dir}")

        records = [
            Record(content=path.read_bytes(), attributes={"filename": path.name})
            for path in sorted(self.input_dir.iterdir())
            if path.is_file()
        ]
        super().__init__(records)
        logging.info(f"从 '{self.input_dir}' 加载了 {len(records)} 条记录")

    def commit(self) -> dict[Outcome, int]:
        """
        把已转移的记录写到输出目录

        Returns:
            各路由写出的文件数
        """
        written: dict[Outcome, int] = {}
        for outcome in Outcome:
            target_dir = self.output_dir / outcome.value
            records = list(self.transferred[outcome])
            if records:
                target_dir.mkdir(parents=True, exist_ok=True)
            for record in records:
                filename = record.attributes.get("filename", record.record_id)
                (target_dir / filename).write_bytes(record.content)
                errors = {
                    key[len(ERROR_ATTRIBUTE_PREFIX):]: value
                    for key, value in record.attributes.items()
                    if key.startswith(ERROR_ATTRIBUTE_PREFIX)
                }
                if errors:
                    errors_dir = self.output_dir / ERRORS_DIR
                    errors_dir.mkdir(parents=True, exist_ok=True)
                    (errors_dir / f"{filename}.error.json").write_text(
                        json.dumps(errors, ensure_ascii=False, indent=2),
                        encoding="utf-8",
                    )
            written[outcome] = len(records)

        logging.info(
            f"结果已写入 '{self.output_dir}' | "
            f"success: {written[Outcome.SUCCESS]}, failure: {written[Outcome.FAILURE]}"
        )
        return written
