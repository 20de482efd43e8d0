import logging
import os
import sys
from datetime import datetime
from typing import Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(level: str = "INFO", log_dir: Optional[str] = None) -> None:
    """configure root logging once: stdout always, a dated file when log_dir is given"""
    root = logging.getLogger()
    if root.handlers:
        return

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        handlers.append(
            logging.FileHandler(
                os.path.join(log_dir, f'pessoas_{datetime.now().strftime("%Y%m%d")}.log'),
                mode='a'
            )
        )

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=handlers,
    )

def get_logger(name: str) -> logging.Logger:
    """get a configured logger instance"""
    return logging.getLogger(name)
