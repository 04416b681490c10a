"""
StackIt Backend — Pure Business Rule Tests
============================================

What:  The small pure functions the services are built on.
How:   No database, no app; plain function calls.

What we test:
    ✅ Vote toggle transitions (add / flip / remove)
    ✅ vote_type parsing and its 400 error
    ✅ Tag name normalization
    ✅ Pagination arithmetic
"""

import pytest

from stackit.exceptions import ValidationError
from stackit.services.pagination import build_pagination, page_offset
from stackit.services.tag_service import normalize_tag_names
from stackit.services.vote_service import VoteAction, parse_vote_type, resolve_vote


class TestResolveVote:

    def test_first_vote_is_added(self):
        assert resolve_vote(None, 1) is VoteAction.ADDED
        assert resolve_vote(None, -1) is VoteAction.ADDED

    def test_same_vote_again_removes_it(self):
        assert resolve_vote(1, 1) is VoteAction.REMOVED
        assert resolve_vote(-1, -1) is VoteAction.REMOVED

    def test_opposite_vote_flips(self):
        assert resolve_vote(1, -1) is VoteAction.CHANGED
        assert resolve_vote(-1, 1) is VoteAction.CHANGED


class TestParseVoteType:

    def test_known_types(self):
        assert parse_vote_type("upvote") == 1
        assert parse_vote_type("downvote") == -1

    @pytest.mark.parametrize("bad", ["", "UPVOTE", "up", "like"])
    def test_unknown_type_is_validation_error(self, bad):
        with pytest.raises(ValidationError) as exc_info:
            parse_vote_type(bad)
        assert exc_info.value.message == "Invalid vote type"
        assert exc_info.value.field == "vote_type"


class TestNormalizeTagNames:

    def test_lowercases_trims_and_dedupes_in_order(self):
        assert normalize_tag_names(["Python", " python ", "FastAPI", ""]) == ["python", "fastapi"]

    def test_blank_names_dropped(self):
        assert normalize_tag_names(["  ", ""]) == []


class TestPagination:

    def test_offset(self):
        assert page_offset(1, 10) == 0
        assert page_offset(3, 10) == 20

    def test_page_below_one_is_treated_as_first(self):
        assert page_offset(0, 10) == 0

    def test_pages_round_up(self):
        pagination = build_pagination(page=1, limit=10, total=21)
        assert pagination.total_pages == 3
        assert pagination.total_count == 21
        assert pagination.has_more is True

    def test_last_page_has_no_more(self):
        pagination = build_pagination(page=3, limit=10, total=21)
        assert pagination.current_page == 3
        assert pagination.has_more is False

    def test_empty_result(self):
        pagination = build_pagination(page=1, limit=10, total=0)
        assert pagination.total_pages == 0
        assert pagination.has_more is False
