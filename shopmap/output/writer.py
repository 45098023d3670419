"""
Shop data file reader/writer.
Handles atomic writes to the single JSON data file the map loads.
"""

import json
import os
from pathlib import Path
from typing import List
import tempfile
import shutil

from ..models import ShopRecord
from ..utils import get_logger


def load_shops(data_file: str) -> List[ShopRecord]:
    """
    Load shop records from the JSON data file.

    Raises:
        FileNotFoundError: the file does not exist
        ValueError: the file is not a JSON list of shop objects
    """
    path = Path(data_file)
    if not path.exists():
        raise FileNotFoundError(f"Data file not found: {data_file}")

    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)

    if not isinstance(data, list):
        raise ValueError(f"Expected a JSON list of shops in {data_file}")

    shops = [ShopRecord.model_validate(item) for item in data]
    get_logger().debug(f"Loaded {len(shops)} shop(s) from {data_file}")
    return shops


class ShopJsonWriter:
    """
    Writes shop records to the JSON data file.
    Writes go through a temp file + rename so the map never reads a half-written file.
    """

    def __init__(self, output_file: str):
        self.output_file = Path(output_file)
        self.logger = get_logger()

        # Ensure output directory exists
        self.output_file.parent.mkdir(parents=True, exist_ok=True)

    def write_shops(self, shops: List[ShopRecord]):
        """Write every shop, replacing the file."""
        self.logger.info(f"Writing {len(shops)} shop(s) to {self.output_file}")

        try:
            content = json.dumps(
                [shop.to_json_dict() for shop in shops],
                ensure_ascii=False,
                indent=2
            )
            self._atomic_write(content + "\n")
            self.logger.info(f"Wrote {len(shops)} shop(s)")

        except Exception as e:
            self.logger.error(f"Error writing data file: {e}", exc_info=True)
            raise

    def _atomic_write(self, content: str):
        """
        Write content atomically using temp file + rename.
        Prevents corruption if process is interrupted.
        """
        temp_fd, temp_path = tempfile.mkstemp(
            dir=self.output_file.parent,
            prefix='.tmp_',
            suffix='.json'
        )

        try:
            with os.fdopen(temp_fd, 'w', encoding='utf-8') as f:
                f.write(content)

            shutil.move(temp_path, self.output_file)

        except Exception:
            # Clean up temp file on error
            if os.path.exists(temp_path):
                os.unlink(temp_path)
            raise
