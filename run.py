# /run.py

import subprocess
import os
import sys

from product_chat.config import get_settings

BASE_DIR = os.path.dirname(os.path.abspath(__file__))


def run_fastapi(port: int):
  subprocess.run([sys.executable, "-m", "uvicorn", "product_chat.main:app", "--host", "0.0.0.0", "--port", str(port)], cwd=BASE_DIR)

if __name__ == "__main__":
  settings = get_settings()
  print(f"Server running on http://localhost:{settings.port}")
  run_fastapi(settings.port)
