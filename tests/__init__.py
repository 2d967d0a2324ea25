"""
AI-FlowStage 测试套件

测试目录结构:
    tests/
    ├── __init__.py
    ├── conftest.py              # pytest fixtures
    ├── core/
    │   ├── clients/
    │   │   └── test_openai_client.py
    │   └── content/
    │       ├── test_builder.py
    │       └── test_interpreter.py
    ├── test_cli.py              # CLI 入口测试
    ├── test_config.py           # 配置加载与激活测试
    ├── test_integration.py      # 目录端到端测试
    ├── test_models.py           # 记录与异常模型测试
    ├── test_processor.py        # 处理器状态机测试
    ├── test_scheduler.py        # 调度器测试
    └── test_session.py          # 处理会话测试
"""
