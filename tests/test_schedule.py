"""parse_hours / ScheduleAssembler のユニットテスト."""

import pytest

from shopmap.models import DayKey, TimeRange, ALL_DAYS
from shopmap.services import parse_hours, is_open, ScheduleAssembler

WEEKDAYS = [DayKey.MON, DayKey.TUE, DayKey.WED, DayKey.THU, DayKey.FRI]


def _range(open_minutes, close_minutes):
    return TimeRange(open_minutes=open_minutes, close_minutes=close_minutes)


class TestParseHours:
    """parse_hours のテスト."""

    def test_range_expansion(self):
        """月～金 の営業時間が平日すべてに入り、土日祝は None になること."""
        hours = parse_hours("月～金: 10:00～19:00")

        for day in WEEKDAYS:
            assert hours.schedule[day] == (_range(600, 1140),)
        for day in (DayKey.SAT, DayKey.SUN, DayKey.HOLIDAY):
            assert hours.schedule[day] is None

    def test_overnight_close(self):
        """深夜営業の閉店時刻が拡張表記で保持されること."""
        hours = parse_hours("17:00～02:00")

        assert hours.schedule[DayKey.MON] == (_range(1020, 1560),)
        assert is_open(hours, "mon", "01:00") is True

    @pytest.mark.parametrize("text", ["17:00～翌2:00", "17:00～26:00", "１７：００〜２６：００"])
    def test_overnight_notations_agree(self, text):
        """翌2:00・26:00 などの表記が同じ結果になること."""
        hours = parse_hours(text)

        assert hours.schedule[DayKey.FRI] == (_range(1020, 1560),)

    def test_closure_precedence(self):
        """定休日は曜日指定のない時間帯よりも優先されること."""
        hours = parse_hours("定休日：日、17:00～23:00")

        assert hours.schedule[DayKey.SUN] is None
        assert hours.schedule[DayKey.MON] == (_range(1020, 1380),)
        assert hours.closed_days == {DayKey.SUN}
        assert is_open(hours, "sun", "20:00") is False

    def test_closure_overrides_explicit_day(self):
        """曜日を明示した時間帯があっても定休日が優先されること."""
        hours = parse_hours("月～日 11:00～20:00 定休日:水")

        assert hours.schedule[DayKey.WED] is None
        assert hours.schedule[DayKey.TUE] == (_range(660, 1200),)

    def test_multi_segment_day(self):
        """ランチとディナーの2枠が定休日以外の全曜日に入ること."""
        hours = parse_hours("11:00～14:00 / 17:00～22:00")

        for day in ALL_DAYS:
            assert hours.schedule[day] == (_range(660, 840), _range(1020, 1320))

        assert is_open(hours, "tue", "12:00") is True
        assert is_open(hours, "tue", "19:00") is True
        assert is_open(hours, "tue", "15:30") is False

    def test_end_to_end(self):
        """曜日列挙・時間帯・定休日を含む文字列が正しく構造化されること."""
        hours = parse_hours("月・水・金: 18:00～23:00、定休日：日")

        assert hours.schedule == {
            DayKey.MON: (_range(1080, 1380),),
            DayKey.TUE: None,
            DayKey.WED: (_range(1080, 1380),),
            DayKey.THU: None,
            DayKey.FRI: (_range(1080, 1380),),
            DayKey.SAT: None,
            DayKey.SUN: None,
            DayKey.HOLIDAY: None,
        }
        assert hours.closed_days == {DayKey.SUN}
        assert is_open(hours, "mon", "19:00") is True
        assert is_open(hours, "tue", "19:00") is False
        assert is_open(hours, "sun", None) is False

    def test_separate_day_groups_append(self):
        """同じ曜日への複数の記載は上書きせず追加されること."""
        hours = parse_hours("月～金 11:00～14:00 金 18:00～23:00")

        assert hours.schedule[DayKey.MON] == (_range(660, 840),)
        assert hours.schedule[DayKey.FRI] == (_range(660, 840), _range(1080, 1380))

    def test_irregular_closure_keeps_every_day(self):
        """不定休 の場合はラベルのみで全曜日が営業扱いになること."""
        hours = parse_hours("定休日：不定休 11:00～20:00")

        assert hours.closed_label == "不定休"
        assert hours.closed_days == frozenset()
        for day in ALL_DAYS:
            assert hours.schedule[day] == (_range(660, 1200),)

    def test_closure_list_with_comma(self):
        """定休日：月曜、火曜 では月曜と火曜の両方が定休日になること."""
        hours = parse_hours("定休日：月曜、火曜 11:00～21:00")

        assert hours.schedule[DayKey.MON] is None
        assert hours.schedule[DayKey.TUE] is None
        assert hours.schedule[DayKey.WED] == (_range(660, 1260),)

    def test_closure_list_with_holiday(self):
        """定休日：日曜、祝日 の後の時間帯が平日に入ること."""
        hours = parse_hours("定休日：日曜、祝日 11:00～21:00")

        assert hours.schedule[DayKey.MON] == (_range(660, 1260),)
        assert hours.schedule[DayKey.SUN] is None
        assert hours.schedule[DayKey.HOLIDAY] is None

    def test_weekly_and_nth_week_closure(self):
        """火曜・第3水曜定休 では火曜だけが休みで水曜は営業扱いになること."""
        hours = parse_hours("11:00～21:00 火曜・第3水曜定休")

        assert hours.schedule[DayKey.TUE] is None
        assert hours.schedule[DayKey.WED] == (_range(660, 1260),)
        assert hours.closed_label == "火曜・第3水曜"

    @pytest.mark.parametrize("text,time_range", [
        ("日替わりランチ 11:00～14:00", (660, 840)),
        ("終日禁煙 11:00～22:00", (660, 1320)),
        ("月替わりコース 18:00～22:00", (1080, 1320)),
    ])
    def test_words_containing_day_glyphs(self, text, time_range):
        """日替わり・終日 などの語は曜日指定にならず全曜日に適用されること."""
        hours = parse_hours(text)

        for day in ALL_DAYS:
            assert hours.schedule[day] == (_range(*time_range),)

    def test_trailing_day_text(self):
        """時間帯の後ろの 月～土 がその時間帯の曜日指定になること."""
        hours = parse_hours("17:00～23:00 月～土")

        assert hours.schedule[DayKey.MON] == (_range(1020, 1380),)
        assert hours.schedule[DayKey.SAT] == (_range(1020, 1380),)
        assert hours.schedule[DayKey.SUN] is None
        assert is_open(hours, "sun", None) is False

    def test_raw_text_kept(self):
        """元の文字列が変更されずに保持されること."""
        raw = "月〜金　１１：００～２０：００"
        assert parse_hours(raw).raw_text == raw

    def test_idempotent(self):
        """同じ文字列を再解析すると同じ結果になること."""
        raw = "月～金 11:00～14:00、17:00～22:00 土日祝 11:00～22:00 定休日:水"
        first = parse_hours(raw)

        assert parse_hours(first.raw_text) == first

    @pytest.mark.parametrize("text", [None, "", "   "])
    def test_empty_returns_none(self, text):
        """空の入力は None になること."""
        assert parse_hours(text) is None

    def test_unparseable_text(self):
        """解析できない文字列は全曜日 None のまま返り、営業中扱いになること."""
        hours = parse_hours("お問い合わせください")

        assert hours is not None
        assert hours.is_unparseable
        assert all(value is None for value in hours.schedule.values())
        assert is_open(hours, "mon", "12:00") is True

    def test_non_string_raises(self):
        """文字列以外は TypeError になること."""
        with pytest.raises(TypeError):
            parse_hours(["11:00～20:00"])


class TestMergeRanges:
    """ScheduleAssembler.merge_ranges のテスト."""

    def test_sorted_by_open(self):
        """開店時刻順に並ぶこと."""
        merged = ScheduleAssembler.merge_ranges([_range(1020, 1320), _range(660, 840)])

        assert merged == (_range(660, 840), _range(1020, 1320))

    def test_overlaps_merged(self):
        """重なる時間帯は1つにまとめられること."""
        merged = ScheduleAssembler.merge_ranges([_range(660, 1200), _range(1080, 1380)])

        assert merged == (_range(660, 1380),)

    def test_duplicates_collapsed(self):
        """同じ時間帯の重複は1つになること."""
        merged = ScheduleAssembler.merge_ranges([_range(660, 840), _range(660, 840)])

        assert merged == (_range(660, 840),)

    def test_adjacent_kept_separate(self):
        """接しているだけの時間帯は別々に残ること."""
        merged = ScheduleAssembler.merge_ranges([_range(660, 840), _range(840, 1000)])

        assert len(merged) == 2
