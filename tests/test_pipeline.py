"""一括再解析・ジャンル整理・検索のテスト."""

import json

import pytest

from shopmap import pipeline
from shopmap.models import MapConfig, ShopRecord
from shopmap.pipeline import reparse_shop, reparse_shops, run_reparse, run_clean_genres, run_query


@pytest.fixture
def shops(sample_shops_data):
    return [ShopRecord.model_validate(item) for item in sample_shops_data]


class TestReparseShop:
    """reparse_shop のテスト."""

    def test_created(self):
        """保存済みデータがなければ created になること."""
        shop = ShopRecord(name="テスト", hours="11:00～20:00")

        assert reparse_shop(shop) == "created"
        assert shop.hours_structured["parsed"]["mon"] == "11:00～20:00"

    def test_unchanged(self):
        """再解析結果が同じなら unchanged になること."""
        shop = ShopRecord(name="テスト", hours="11:00～20:00")
        reparse_shop(shop)

        assert reparse_shop(shop) == "unchanged"

    def test_fixed(self):
        """以前は空だった結果に営業時間が入れば fixed になること."""
        shop = ShopRecord(
            name="テスト",
            hours="11:00～20:00",
            hours_structured={"text": "11:00～20:00", "parsed": {"mon": None, "tue": None}},
        )

        assert reparse_shop(shop) == "fixed"

    def test_updated(self):
        """以前の結果と異なれば updated になること."""
        shop = ShopRecord(
            name="テスト",
            hours="11:00～21:00",
            hours_structured={"text": "11:00～20:00", "parsed": {"mon": "11:00～20:00"}},
        )

        assert reparse_shop(shop) == "updated"
        assert shop.hours_structured["text"] == "11:00～21:00"

    def test_cleared(self):
        """営業時間が空になれば保存済みデータが消され cleared になること."""
        shop = ShopRecord(name="テスト", hours="  ", hours_structured={"text": "x", "parsed": {}})

        assert reparse_shop(shop) == "cleared"
        assert shop.hours_structured is None

    def test_no_hours_unchanged(self):
        """営業時間も保存済みデータもなければ unchanged になること."""
        assert reparse_shop(ShopRecord(name="テスト")) == "unchanged"


class TestReparseShops:
    """reparse_shops のテスト."""

    def test_counts(self, shops):
        """結果ごとの件数が集計されること."""
        stats = reparse_shops(shops)

        assert stats.total == 4
        assert stats.created == 3
        assert stats.cleared == 1
        assert stats.failed == 0
        assert stats.changed == 4

    def test_second_run_unchanged(self, shops):
        """2回目の再解析ではすべて unchanged になること."""
        reparse_shops(shops)
        stats = reparse_shops(shops)

        assert stats.unchanged == 4
        assert stats.changed == 0

    def test_failure_recorded(self, shops, monkeypatch):
        """1店舗の失敗で処理が止まらず failed として記録されること."""
        original = pipeline.parse_hours

        def flaky_parse(text):
            if "日曜定休" in text:
                raise ValueError("broken")
            return original(text)

        monkeypatch.setattr(pipeline, "parse_hours", flaky_parse)

        stats = reparse_shops(shops)

        assert stats.failed == 1
        assert stats.created == 2
        assert stats.issues == ["バー ミッドナイト: broken"]


class TestRunReparse:
    """run_reparse のテスト."""

    def test_writes_data_file(self, shops_file, load_json):
        """再解析結果がデータファイルに書き込まれること."""
        stats = run_reparse(MapConfig(data_file=str(shops_file)))
        data = load_json(shops_file)

        assert stats.created == 3
        assert data[0]["hours_structured"]["parsed"]["mon"] == "18:00～23:00"
        assert data[0]["hours_structured"]["closed"] == "日"
        assert data[2]["hours_structured"]["parsed"]["sun"] is None
        assert data[3]["hours_structured"] is None

    def test_unknown_fields_kept(self, shops_file, load_json):
        """元データの項目が書き込み後も残ること."""
        run_reparse(MapConfig(data_file=str(shops_file)))
        data = load_json(shops_file)

        assert data[0]["address"] == "佐賀県佐賀市駅前中央1-1-1"
        assert data[0]["url"] == "https://example.com/hanamaru"
        assert data[2]["lat"] is None
        assert "lat" not in data[3]

    def test_loaded_keys_written_back(self, tmp_path, load_json):
        """hoursRaw キーと空文字の緯度経度がそのまま書き戻されること."""
        path = tmp_path / "shops.json"
        path.write_text(
            json.dumps([{"name": "串カツ 一番", "hoursRaw": "17:00～23:00", "lat": "", "lng": ""}], ensure_ascii=False),
            encoding="utf-8",
        )

        stats = run_reparse(MapConfig(data_file=str(path)))
        data = load_json(path)

        assert stats.created == 1
        assert data[0]["hoursRaw"] == "17:00～23:00"
        assert "hours" not in data[0]
        assert data[0]["lat"] == ""
        assert data[0]["lng"] == ""
        assert data[0]["hours_structured"]["parsed"]["mon"] == "17:00～23:00"

    def test_dry_run_does_not_write(self, shops_file):
        """dry_run では書き込まれないこと."""
        before = shops_file.read_text(encoding="utf-8")

        stats = run_reparse(MapConfig(data_file=str(shops_file)), dry_run=True)

        assert stats.created == 3
        assert shops_file.read_text(encoding="utf-8") == before

    def test_output_file(self, shops_file, tmp_path, load_json):
        """出力先を指定すると元のファイルは変更されないこと."""
        before = shops_file.read_text(encoding="utf-8")
        output = tmp_path / "out" / "shops.json"

        run_reparse(MapConfig(data_file=str(shops_file), output_file=str(output)))

        assert shops_file.read_text(encoding="utf-8") == before
        assert len(load_json(output)) == 4

    def test_missing_data_file(self, tmp_path):
        """データファイルがなければ FileNotFoundError になること."""
        with pytest.raises(FileNotFoundError):
            run_reparse(MapConfig(data_file=str(tmp_path / "missing.json")))

    def test_not_a_list(self, tmp_path):
        """リスト以外の JSON は ValueError になること."""
        path = tmp_path / "shops.json"
        path.write_text('{"name": "x"}', encoding="utf-8")

        with pytest.raises(ValueError):
            run_reparse(MapConfig(data_file=str(path)))


class TestRunCleanGenres:
    """run_clean_genres のテスト."""

    def test_cleans_and_writes(self, shops_file, load_json):
        """除外パターンを含むタグが消えて書き込まれること."""
        updated = run_clean_genres(MapConfig(data_file=str(shops_file)))
        data = load_json(shops_file)

        assert updated == 2
        assert data[2]["genre"] == ["バー"]
        assert data[3]["genre"] == ["カフェ"]


class TestRunQuery:
    """run_query のテスト."""

    def test_filters(self, shops_file):
        """条件に合う店舗だけが返ること."""
        shops = run_query(MapConfig(data_file=str(shops_file)), genre="ラーメン", day="sun", time_of_day="12:00")

        assert [shop.name for shop in shops] == ["ラーメン 一番星"]

    def test_open_now(self, shops_file, monkeypatch):
        """open_now では現在時刻で判定されること."""
        import pytz
        from datetime import datetime

        tokyo = pytz.timezone("Asia/Tokyo")
        # 2024-01-07 は日曜日
        monkeypatch.setattr(pipeline, "now_in", lambda tz: tokyo.localize(datetime(2024, 1, 7, 12, 30)))

        shops = run_query(MapConfig(data_file=str(shops_file)), open_now=True)

        assert [shop.name for shop in shops] == ["ラーメン 一番星", "カフェ 木もれび"]
