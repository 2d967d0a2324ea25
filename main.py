#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
AI-FlowStage 主入口模块

cli.py 中 process 子命令的精简替代方案。

运行方式:
    # 使用默认配置文件 config.yaml
    python main.py

    # 指定自定义配置文件
    python main.py -c my_config.yaml

    # 仅校验处理器属性
    python main.py -c config.yaml --validate

退出码:
    0 - 执行成功
    1 - 用户中断或发生错误
"""

import argparse
import sys

from src.core import FlowStageRunner


def main() -> int:
    """
    主入口函数

    Returns:
        int: 退出码，0 表示成功，1 表示失败
    """
    parser = argparse.ArgumentParser(
        description="AI-FlowStage OpenAI 记录处理阶段",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
示例:
    python main.py --config config.yaml
    python main.py -c my_config.yaml --validate
        """,
    )
    parser.add_argument(
        "--config",
        "-c",
        default="config.yaml",
        help="配置文件路径 (默认: config.yaml)",
    )
    parser.add_argument(
        "--validate",
        action="store_true",
        help="仅校验处理器属性，不处理记录",
    )

    args = parser.parse_args()

    try:
        runner = FlowStageRunner(args.config)

        if args.validate:
            configuration = runner.validate()
            print(f"✓ 配置文件有效: {args.config}")
            print(f"  - 模型: {configuration.model}")
            return 0

        runner.run()
        return 0

    except KeyboardInterrupt:
        print("\n\n程序被用户中断")
        return 1

    except Exception as e:
        print(f"\n\n❌ 程序执行出错: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
