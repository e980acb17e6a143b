"""Assistant Messages 测试套件。

测试分层：
- unit/: 单元测试 - 快速、隔离，HTTP 由 httpx.MockTransport 模拟
- integration/: 集成测试 - 资源客户端、HTTP 客户端与模型解码协同工作

使用方法：
    pytest                          # 运行所有测试
    pytest tests/unit/ -m unit      # 仅单元测试
"""
