"""
pytest共通フィクスチャ
"""

import json
import sys
from pathlib import Path

import pytest

# プロジェクトルートをパスに追加
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))


@pytest.fixture
def sample_shops_data():
    """テスト用店舗データ（data/shops.json と同じ形式）"""
    return [
        {
            "name": "居酒屋 はなまる",
            "address": "佐賀県佐賀市駅前中央1-1-1",
            "lat": 33.264,
            "lng": 130.297,
            "genre": ["居酒屋", "焼き鳥"],
            "url": "https://example.com/hanamaru",
            "hours": "月・水・金: 18:00～23:00、定休日：日",
        },
        {
            "name": "ラーメン 一番星",
            "address": "佐賀県佐賀市白山2-2-2",
            "lat": 33.251,
            "lng": 130.300,
            "genre": ["ラーメン"],
            "url": "https://example.com/ichibanboshi",
            "hours": "11:00～14:00 / 17:00～22:00",
        },
        {
            "name": "バー ミッドナイト",
            "address": "佐賀県佐賀市愛敬町3-3",
            "lat": None,
            "lng": None,
            "genre": ["バー", "佐賀市"],
            "url": "https://example.com/midnight",
            "hours": "20:00～02:00 日曜定休",
        },
        {
            "name": "カフェ 木もれび",
            "address": "佐賀県佐賀市神園4-4",
            "genre": ["カフェ", "カフェ"],
            "url": "https://example.com/komorebi",
            "hours": "",
            "hours_structured": {"text": "古いデータ", "parsed": {}},
        },
    ]


@pytest.fixture
def shops_file(tmp_path, sample_shops_data):
    """一時ディレクトリに書き出した店舗データファイル"""
    path = tmp_path / "shops.json"
    path.write_text(json.dumps(sample_shops_data, ensure_ascii=False, indent=2), encoding="utf-8")
    return path


@pytest.fixture
def load_json():
    """JSON ファイルを読み込むヘルパー"""
    def _load(path):
        return json.loads(Path(path).read_text(encoding="utf-8"))
    return _load
