"""
Email OTP Retrieval API (IMAP) - 服务入口

运行：
    uv run python main.py

或使用 uvicorn：
    uv run uvicorn main:app --host 0.0.0.0 --port 3000 --reload

API 文档：
    http://localhost:3000/docs
"""

import uvicorn

from infrastructure.config.settings import get_settings
from infrastructure.logging import setup_logging
from interfaces.api import create_app


settings = get_settings()
setup_logging(settings.log_level, settings.log_file or None)

# 导出 FastAPI app (用于 uvicorn)
app = create_app(settings)


if __name__ == "__main__":
    print("=" * 50)
    print(f"启动 {settings.app_name}")
    print("=" * 50)
    print()
    print("API 端点:")
    print("  GET  /                    - 健康检查")
    print("  GET  /accounts            - 查询可用邮箱")
    print()
    print("  POST /otp                 - 按参考码检索 OTP")
    print("  GET  /otp/{referenceCode} - 按参考码检索 OTP（?accounts=a,b&timeout=ms）")
    print()
    print(f"文档: http://localhost:{settings.port}/docs")
    print("=" * 50)

    uvicorn.run(app, host=settings.host, port=settings.port)
