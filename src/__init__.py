"""AI-FlowStage: 把记录内容交给 OpenAI 生成回复并路由的管道处理阶段"""

__version__ = "1.0.0"
