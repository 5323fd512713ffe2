"""
Unit tests for LeaderboardService
"""

import pytest

from pickem.services.leaderboard_service import (
    InvalidLeaderboardRequestError,
    SeasonNotConfiguredError,
)


@pytest.fixture
def week_one_games(make_game):
    return [
        # KSU -5 wins 35-17: KSU covers by 13
        make_game("g1", week=1, spread=-5, home_score=35, away_score=17),
        # Iowa -7 wins 24-17: push
        make_game("g2", week=1, home_team="IOWA", away_team="NEBRASKA", spread=-7, home_score=24, away_score=17),
        # not played yet
        make_game("g3", week=1, home_team="OREGON", away_team="PENN STATE", spread=-2.5, status="scheduled"),
    ]


class TestWeeklyLeaderboard:
    """Test suite for the weekly leaderboard."""

    @pytest.mark.asyncio
    async def test_weekly_ranks_and_records(self, build_service, make_pick, week_one_games):
        service = build_service(
            games=week_one_games,
            registered=[
                make_pick("alice", "g1", "KANSAS STATE", is_lock=True),
                make_pick("alice", "g2", "IOWA"),
                make_pick("bob", "g1", "TEXAS TECH"),
                make_pick("bob", "g3", "OREGON"),
            ],
            names={"alice": "Alice"},
        )

        result = await service.get_weekly_leaderboard(2025, 1)

        assert result.scope == "weekly"
        assert result.week == 1
        assert result.error_count == 0
        assert [(e.user_id, e.rank, e.total_points) for e in result.entries] == [
            ("alice", 1, 32),
            ("bob", 2, 0),
        ]
        alice, bob = result.entries
        assert alice.display_name == "Alice"
        assert alice.record == "1-0-1"
        assert alice.lock_record == "1-0-0"
        # missing user names fall back to the user id
        assert bob.display_name == "bob"
        assert bob.total_picks == 2
        assert bob.pending_picks == 1
        assert bob.record == "0-1-0"

    @pytest.mark.asyncio
    async def test_anonymous_duplicate_is_dropped(self, build_service, make_pick, week_one_games):
        service = build_service(
            games=week_one_games,
            registered=[make_pick("alice", "g1", "TEXAS TECH")],
            anonymous=[
                make_pick("alice", "g1", "KANSAS STATE", anonymous=True),
                make_pick("alice", "g2", "IOWA", anonymous=True),
            ],
        )

        result = await service.get_weekly_leaderboard(2025, 1)

        entry = result.entries[0]
        assert entry.total_picks == 2
        assert entry.record == "0-1-1"
        assert entry.total_points == 10
        assert result.warnings == []

    @pytest.mark.asyncio
    async def test_anonymous_only_user_appears(self, build_service, make_pick, week_one_games):
        service = build_service(
            games=week_one_games,
            anonymous=[make_pick("carol", "g1", "KANSAS STATE", anonymous=True)],
        )

        result = await service.get_weekly_leaderboard(2025, 1)

        assert [(e.user_id, e.total_points) for e in result.entries] == [("carol", 21)]

    @pytest.mark.asyncio
    async def test_unmatched_game_is_reported_not_fatal(self, build_service, make_pick, week_one_games):
        service = build_service(
            games=week_one_games,
            registered=[
                make_pick("alice", "g1", "KANSAS STATE"),
                make_pick("alice", "ghost", "KANSAS STATE"),
                make_pick("bob", "g2", "IOWA"),
            ],
        )

        result = await service.get_weekly_leaderboard(2025, 1)

        assert [(e.user_id, e.total_points) for e in result.entries] == [("alice", 21), ("bob", 10)]
        assert result.entries[0].total_picks == 1
        assert result.error_count == 1
        assert len(result.warnings) == 1

    @pytest.mark.asyncio
    async def test_tied_users_share_rank(self, build_service, make_pick, week_one_games):
        service = build_service(
            games=week_one_games,
            registered=[
                make_pick("alice", "g1", "KANSAS STATE"),
                make_pick("bob", "g1", "KANSAS STATE"),
                make_pick("carol", "g2", "IOWA"),
            ],
        )

        result = await service.get_weekly_leaderboard(2025, 1)

        assert [e.rank for e in result.entries] == [1, 1, 3]

    @pytest.mark.asyncio
    async def test_empty_week(self, build_service):
        result = await build_service().get_weekly_leaderboard(2025, 4)

        assert result.entries == []
        assert result.error_count == 0

    @pytest.mark.asyncio
    @pytest.mark.parametrize("season,week", [(2025, 0), (2025, -1), (0, 1)])
    async def test_invalid_request(self, build_service, season, week):
        with pytest.raises(InvalidLeaderboardRequestError):
            await build_service().get_weekly_leaderboard(season, week)

    @pytest.mark.asyncio
    async def test_is_idempotent(self, build_service, make_pick, week_one_games):
        service = build_service(
            games=week_one_games,
            registered=[make_pick("alice", "g1", "KANSAS STATE"), make_pick("bob", "g2", "IOWA")],
        )

        first = await service.get_weekly_leaderboard(2025, 1)
        second = await service.get_weekly_leaderboard(2025, 1)

        assert first == second


class TestSeasonLeaderboard:
    """Test suite for the season leaderboard."""

    @pytest.mark.asyncio
    async def test_season_sums_weeks(self, build_service, make_pick, make_game):
        games = [
            make_game("w1", week=1, spread=-5, home_score=35, away_score=17),
            make_game("w2", week=2, spread=-3, home_score=20, away_score=10),
        ]
        service = build_service(
            games=games,
            registered=[
                make_pick("alice", "w1", "KANSAS STATE", week=1),
                make_pick("alice", "w2", "KANSAS STATE", week=2, precomputed=("win", 24)),
                make_pick("bob", "w1", "KANSAS STATE", week=1),
                make_pick("bob", "w2", "KANSAS STATE", week=2),
            ],
        )

        result = await service.get_season_leaderboard(2025)

        assert result.scope == "season"
        assert [(e.user_id, e.rank, e.total_points) for e in result.entries] == [
            ("alice", 1, 45),
            ("bob", 2, 41),
        ]
        assert result.entries[0].record == "2-0-0"

    @pytest.mark.asyncio
    async def test_same_game_in_different_weeks_is_not_a_duplicate(self, build_service, make_pick, make_game):
        games = [make_game("g1", week=1, spread=-5, home_score=35, away_score=17)]
        service = build_service(
            games=games,
            registered=[make_pick("alice", "g1", "KANSAS STATE", week=1)],
            anonymous=[make_pick("alice", "g1", "KANSAS STATE", week=2, anonymous=True)],
        )

        result = await service.get_season_leaderboard(2025)

        assert result.entries[0].total_picks == 2

    @pytest.mark.asyncio
    async def test_other_seasons_are_ignored(self, build_service, make_pick, make_game):
        games = [make_game("g1", week=1, spread=-5, home_score=35, away_score=17)]
        service = build_service(
            games=games,
            registered=[make_pick("alice", "g1", "KANSAS STATE", season=2024)],
        )

        result = await service.get_season_leaderboard(2025)

        assert result.entries == []


class TestBestFinishLeaderboard:
    """Test suite for the best-finish leaderboard."""

    @pytest.fixture
    def late_season(self, make_game, make_pick):
        games = [
            make_game("w10", week=10, spread=-5, home_score=70, away_score=0),
            make_game("w11", week=11, spread=-5, home_score=35, away_score=17),
            make_game("w12", week=12, spread=-7, home_score=24, away_score=17),
            make_game("w13", week=13, spread=-5, home_score=60, away_score=10),
        ]
        registered = [
            make_pick("alice", "w10", "KANSAS STATE", week=10),
            make_pick("alice", "w11", "KANSAS STATE", week=11),
            make_pick("alice", "w12", "KANSAS STATE", week=12),
            make_pick("bob", "w13", "KANSAS STATE", week=13, is_lock=True),
            make_pick("carol", "w10", "KANSAS STATE", week=10),
        ]
        return games, registered

    @pytest.mark.asyncio
    async def test_best_finish_entries(self, build_service, late_season):
        games, registered = late_season
        service = build_service(games=games, registered=registered, best_finish_weeks={2025: [11, 12, 13]})

        result = await service.get_best_finish_leaderboard(2025)

        assert result.scope == "best_finish"
        assert result.eligible_weeks == [11, 12, 13]
        # carol only played week 10
        assert [(e.user_id, e.rank, e.total_points) for e in result.entries] == [
            ("alice", 1, 31),
            ("bob", 2, 30),
        ]
        alice, bob = result.entries
        assert alice.included_weeks == [11, 12, 13]
        assert alice.weeks_played == [11, 12]
        assert alice.worst_week_score == 0
        assert [week.points for week in alice.weeks] == [21, 10, 0]
        assert bob.worst_week_score == 0
        assert bob.lock_record == "1-0-0"

    @pytest.mark.asyncio
    async def test_settings_override_week_settings(self, build_service, late_season, test_settings):
        games, registered = late_season
        settings = test_settings.model_copy(update={"best_finish_weeks": {2025: [13]}})
        service = build_service(
            games=games,
            registered=registered,
            best_finish_weeks={2025: [11, 12, 13]},
            settings=settings,
        )

        result = await service.get_best_finish_leaderboard(2025)

        assert result.eligible_weeks == [13]
        assert [e.user_id for e in result.entries] == ["bob"]

    @pytest.mark.asyncio
    async def test_unconfigured_season_raises(self, build_service):
        with pytest.raises(SeasonNotConfiguredError):
            await build_service().get_best_finish_leaderboard(2025)

    @pytest.mark.asyncio
    async def test_no_eligible_weeks_is_empty(self, build_service, late_season):
        games, registered = late_season
        service = build_service(games=games, registered=registered, best_finish_weeks={2025: []})

        result = await service.get_best_finish_leaderboard(2025)

        assert result.entries == []
        assert result.eligible_weeks == []

    @pytest.mark.asyncio
    async def test_warnings_only_cover_eligible_weeks(self, build_service, late_season, make_pick):
        games, registered = late_season
        registered = registered + [
            make_pick("alice", "ghost10", "KANSAS STATE", week=10),
            make_pick("alice", "ghost12", "KANSAS STATE", week=12),
        ]
        service = build_service(games=games, registered=registered, best_finish_weeks={2025: [11, 12, 13]})

        result = await service.get_best_finish_leaderboard(2025)

        assert result.error_count == 1
        assert len(result.warnings) == 1
        assert "ghost12" in result.warnings[0]

    @pytest.mark.asyncio
    async def test_best_finish_details(self, build_service, late_season):
        games, registered = late_season
        service = build_service(games=games, registered=registered, best_finish_weeks={2025: [11, 12, 13]})

        details = await service.get_best_finish_details(2025, "alice")

        assert [(week.week, week.points, week.record) for week in details] == [
            (11, 21, "1-0-0"),
            (12, 10, "0-0-1"),
            (13, 0, "0-0-0"),
        ]
        assert await service.get_best_finish_details(2025, "carol") == []


class TestScorePick:

    def test_delegates_to_points_service(self, build_service, make_pick, completed_game):
        scored = build_service().score_pick(make_pick("alice", "g1", "KANSAS STATE"), completed_game)

        assert scored.points == 21
