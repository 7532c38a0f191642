import sys
from pathlib import Path

from loguru import logger

from src.config.settings import LOG_DIR, LOG_LEVEL, LOG_RETENTION, LOG_ROTATION

log_file = Path(LOG_DIR) / "install_if_different_{time}.log"

logger.remove()
# 檔案記錄所有決策細節；終端機只顯示警告以上
logger.add(
    log_file,
    rotation=LOG_ROTATION,  # 嵌入式裝置儲存空間有限，預設較小
    retention=LOG_RETENTION,
    compression="zip",
    encoding="utf-8",
    level=LOG_LEVEL,
)
logger.add(sys.stderr, level="WARNING", format="{time:HH:mm:ss} | {level} | {message}")
