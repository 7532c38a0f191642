# 執行期設定 (由 .env 或環境變數覆寫)

import os

from dotenv import load_dotenv

load_dotenv()

# 日誌輸出目錄與等級
LOG_DIR = os.getenv("INSTALL_IF_DIFFERENT_LOG_DIR", "logs")
LOG_LEVEL = os.getenv("INSTALL_IF_DIFFERENT_LOG_LEVEL", "DEBUG")

# 計算 sha256 時每次讀取的位元組數
READ_CHUNK_SIZE = int(os.getenv("INSTALL_IF_DIFFERENT_READ_CHUNK_SIZE", str(64 * 1024)))

# 日誌檔切分與保留策略 (loguru 格式)
LOG_ROTATION = os.getenv("INSTALL_IF_DIFFERENT_LOG_ROTATION", "16 MB")
LOG_RETENTION = os.getenv("INSTALL_IF_DIFFERENT_LOG_RETENTION", "10 days")
