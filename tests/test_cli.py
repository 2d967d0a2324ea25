"""
CLI 入口测试

被测模块: cli.py

测试类/函数清单:
    TestCLI                        CLI 命令测试
        test_version               验证 version 命令输出包含版本号
        test_help                  验证 --help 列出所有子命令
        test_process_help          验证 process --help 显示 --config/--validate 参数
        test_process_validate      验证有效配置文件通过 --validate 检查
        test_process_missing_key   验证缺少 api_key 导致非零退出码且不泄露其他属性
        test_process_invalid_config 验证不存在的配置文件导致非零退出码
        test_no_command            验证无命令时显示帮助信息
"""

import subprocess
import sys
from pathlib import Path

import yaml

REPO_ROOT = Path(__file__).parent.parent


def run_cli(*args):
    return subprocess.run(
        [sys.executable, "cli.py", *args],
        capture_output=True,
        text=True,
        encoding="utf-8",
        cwd=REPO_ROOT,
    )


class TestCLI:
    """CLI 命令测试"""

    def test_version(self):
        """测试 version 命令"""
        from src import __version__

        result = run_cli("version")

        assert result.returncode == 0
        assert f"AI-FlowStage v{__version__}" in result.stdout

    def test_help(self):
        """测试帮助信息"""
        result = run_cli("--help")

        assert result.returncode == 0
        assert "process" in result.stdout
        assert "version" in result.stdout

    def test_process_help(self):
        """测试 process 子命令帮助"""
        result = run_cli("process", "--help")

        assert result.returncode == 0
        assert "--config" in result.stdout
        assert "--validate" in result.stdout

    def test_process_validate(self, sample_config_file):
        """测试有效配置验证"""
        result = run_cli("process", "-c", str(sample_config_file), "--validate")

        assert result.returncode == 0
        assert "[OK] Config valid" in result.stdout
        assert "gpt-3.5-turbo" in result.stdout

    def test_process_missing_key(self, sample_config, tmp_path):
        """测试缺少 api_key"""
        del sample_config["processor"]["api_key"]
        config_path = tmp_path / "no_key.yaml"
        config_path.write_text(yaml.dump(sample_config), encoding="utf-8")

        result = run_cli("process", "-c", str(config_path), "--validate")

        assert result.returncode == 1
        assert "[ERROR]" in result.stdout
        assert "OpenAI API Key" in result.stdout

    def test_process_invalid_config(self):
        """测试不存在的配置文件"""
        result = run_cli("process", "-c", "nonexistent_config.yaml", "--validate")

        assert result.returncode == 1
        assert "[ERROR]" in result.stdout

    def test_no_command(self):
        """测试无命令时显示帮助"""
        result = run_cli()

        assert result.returncode == 0
        assert "usage" in result.stdout.lower()
