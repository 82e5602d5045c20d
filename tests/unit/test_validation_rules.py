"""Unit tests for the structural, consistency and referential checkers."""

from typing import Any

from citegate.core.models import Citation, CitationKind, Creator
from citegate.validation.consistency import check_consistency
from citegate.validation.models import IssueCode, Severity
from citegate.validation.referential import check_references
from citegate.validation.structural import (
    REQUIRED_FIELDS,
    check_structure,
    present_required_fields,
)


def make_citation(**overrides: Any) -> Citation:
    """Helper to build a complete journal article, overriding some fields."""
    data = dict(
        citation_id="c1",
        kind=CitationKind.JOURNAL_ARTICLE,
        title="Computing Machinery and Intelligence",
        creators=[Creator(given_name="Alan", family_name="Turing")],
        venue="Mind",
        date="1950-10",
        doi="10.1093/mind/LIX.236.433",
    )
    data.update(overrides)
    return Citation(**data)


class TestStructuralChecker:
    """Tests for required-field checks."""

    def test_complete_record_has_no_issues(self) -> None:
        assert check_structure(make_citation()) == []

    def test_every_kind_has_a_required_field_table(self) -> None:
        assert set(REQUIRED_FIELDS) == set(CitationKind)

    def test_missing_fields_yield_errors(self) -> None:
        issues = check_structure(make_citation(venue=None, date=None))
        assert [i.field for i in issues] == ["venue", "date"]
        assert all(i.severity == Severity.ERROR for i in issues)
        assert all(i.suggestion for i in issues)
        assert not any(i.requires_exploration for i in issues)

    def test_empty_creators_reported_twice(self) -> None:
        """Test required-field miss and the dedicated no-creators error both fire."""
        issues = check_structure(make_citation(creators=[]))
        codes = [i.code for i in issues]
        assert codes == [IssueCode.MISSING_FIELD, IssueCode.NO_CREATORS]
        assert all(i.field == "creators" for i in issues)

    def test_blank_title_reported_twice(self) -> None:
        issues = check_structure(make_citation(title="   "))
        assert [i.code for i in issues] == [IssueCode.MISSING_FIELD, IssueCode.BLANK_TITLE]

    def test_no_creators_fires_when_kind_does_not_require_them(self) -> None:
        """Test a webpage without creators still gets the no-creators error."""
        page = Citation(
            citation_id="w1",
            kind="webpage",
            title="Ludwig Wittgenstein",
            url="https://plato.stanford.edu/entries/wittgenstein/",
            date="2002-11-08",
        )
        issues = check_structure(page)
        assert [i.code for i in issues] == [IssueCode.NO_CREATORS]

    def test_present_required_fields(self) -> None:
        citation = make_citation(creators=[], date=None)
        assert present_required_fields(citation) == ["title", "venue"]

    def test_manuscript_needs_only_title_and_creators(self) -> None:
        manuscript = Citation(
            citation_id="m1",
            kind="manuscript",
            title="Notes on logic",
            creators=[Creator(family_name="Wittgenstein")],
        )
        assert check_structure(manuscript) == []


class TestConsistencyChecker:
    """Tests for date and creator consistency."""

    def test_well_formed_dates(self) -> None:
        for value in ("1950", "1950-10", "1950-10-01"):
            assert check_consistency(make_citation(date=value)) == []

    def test_absent_date_is_not_a_consistency_issue(self) -> None:
        assert check_consistency(make_citation(date=None)) == []

    def test_malformed_date(self) -> None:
        issues = check_consistency(make_citation(date="October 1950"))
        assert len(issues) == 1
        issue = issues[0]
        assert issue.severity == Severity.ERROR
        assert issue.field == "date"
        assert issue.code == IssueCode.INVALID_DATE
        assert "invalid" in issue.message.lower()
        assert issue.requires_exploration is False

    def test_non_ascii_digits_are_a_format_error(self) -> None:
        issues = check_consistency(make_citation(date="\u0661\u0669\u0665\u0663"))
        assert [i.code for i in issues] == [IssueCode.INVALID_DATE]

    def test_impossible_calendar_date(self) -> None:
        issues = check_consistency(make_citation(date="2021-02-30"))
        assert [i.code for i in issues] == [IssueCode.INVALID_DATE]

    def test_implausible_year_is_exploration_warning(self) -> None:
        issues = check_consistency(make_citation(date="1700-01-01"))
        assert len(issues) == 1
        assert issues[0].severity == Severity.WARNING
        assert issues[0].requires_exploration is True
        assert issues[0].code == IssueCode.IMPLAUSIBLE_YEAR

    def test_year_window_bounds_are_inclusive(self) -> None:
        assert check_consistency(make_citation(date="1800")) == []
        assert len(check_consistency(make_citation(date="1799"))) == 1
        assert check_consistency(make_citation(date="2100")) == []
        assert len(check_consistency(make_citation(date="2101"))) == 1

    def test_custom_year_window(self) -> None:
        issues = check_consistency(make_citation(date="1950"), min_year=1960, max_year=2000)
        assert [i.code for i in issues] == [IssueCode.IMPLAUSIBLE_YEAR]

    def test_each_blank_family_name_is_an_error(self) -> None:
        creators = [
            Creator(family_name=""),
            Creator(family_name="Turing"),
            Creator(family_name="  ", given_name="Anon"),
        ]
        issues = check_consistency(make_citation(creators=creators))
        assert len(issues) == 2
        assert all(i.severity == Severity.ERROR for i in issues)
        assert "position 1" in issues[0].message
        assert "position 3" in issues[1].message


class TestReferentialChecker:
    """Tests for identifier format checks."""

    def test_valid_identifiers(self) -> None:
        citation = make_citation(
            doi="10.1234/abc",
            isbn="978-0-631-23127-1",
            issn="0026-4423",
            url="https://example.org/a",
        )
        assert check_references(citation) == []

    def test_malformed_doi_yields_one_warning(self) -> None:
        issues = check_references(make_citation(doi="abc123"))
        assert len(issues) == 1
        assert issues[0].severity == Severity.WARNING
        assert issues[0].field == "DOI"
        assert issues[0].requires_exploration is True

    def test_doi_registrant_must_use_ascii_digits(self) -> None:
        issues = check_references(make_citation(doi="10.\u0661\u0662\u0663\u0664/abc"))
        assert [i.field for i in issues] == ["DOI"]

    def test_prefixed_doi_is_accepted(self) -> None:
        assert check_references(make_citation(doi="https://doi.org/10.1234/abc")) == []

    def test_malformed_isbn(self) -> None:
        issues = check_references(make_citation(isbn="12345"))
        assert [i.field for i in issues] == ["ISBN"]

    def test_malformed_issn_and_url(self) -> None:
        issues = check_references(make_citation(issn="12-34", url="example.org"))
        assert [i.field for i in issues] == ["ISSN", "URL"]

    def test_no_identifier_warning(self) -> None:
        issues = check_references(make_citation(doi=None))
        assert len(issues) == 1
        assert issues[0].code == IssueCode.NO_IDENTIFIER
        assert issues[0].requires_exploration is True

    def test_issn_alone_is_not_a_persistent_identifier(self) -> None:
        issues = check_references(make_citation(doi=None, issn="0026-4423"))
        assert [i.code for i in issues] == [IssueCode.NO_IDENTIFIER]

    def test_manuscript_may_lack_identifiers(self) -> None:
        manuscript = Citation(citation_id="m", kind="manuscript", title="Draft")
        assert check_references(manuscript) == []

    def test_checker_never_raises_errors(self) -> None:
        citation = make_citation(doi="bad", isbn="bad", issn="bad", url="bad")
        issues = check_references(citation)
        assert len(issues) == 4
        assert all(i.severity == Severity.WARNING for i in issues)
