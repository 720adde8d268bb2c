"""Tests for candidate matching."""

from hulud_checker.core.extractors import CandidatePair
from hulud_checker.core.matcher import VulnerabilityMatcher, match_candidates


class TestVulnerabilityMatcher:
    """Test deduplication and filtering against the index."""

    def test_duplicates_reported_once(self, index):
        """Test that a repeated pair is checked and reported once."""
        candidates = [
            CandidatePair("left-pad", "1.3.0"),
            CandidatePair("left-pad", "1.3.0"),
            CandidatePair("lodash", "4.17.21"),
        ]

        assert VulnerabilityMatcher(index).match(candidates) == [CandidatePair("left-pad", "1.3.0")]

    def test_first_occurrence_order(self, index):
        candidates = [
            CandidatePair("ngx-bootstrap", "18.1.4"),
            CandidatePair("lodash", "4.17.21"),
            CandidatePair("@ctrl/tinycolor", "4.1.2"),
            CandidatePair("left-pad", "1.3.0"),
            CandidatePair("ngx-bootstrap", "18.1.4"),
        ]

        matches = VulnerabilityMatcher(index).match(candidates)

        assert [match.name for match in matches] == ["ngx-bootstrap", "@ctrl/tinycolor", "left-pad"]

    def test_unaffected_version_not_reported(self, index):
        """Test that a known name at another version is not a match."""
        candidates = [CandidatePair("@ctrl/tinycolor", "4.1.0"), CandidatePair("left-pad", "1.3.1")]

        assert VulnerabilityMatcher(index).match(candidates) == []

    def test_unknown_name_not_reported(self, index):
        assert VulnerabilityMatcher(index).match([CandidatePair("react", "1.3.0")]) == []

    def test_same_version_different_packages(self, index):
        """Test that dedup keys include the name."""
        candidates = [CandidatePair("@ctrl/tinycolor", "4.1.1"), CandidatePair("other", "4.1.1")]

        assert VulnerabilityMatcher(index).match(candidates) == [CandidatePair("@ctrl/tinycolor", "4.1.1")]

    def test_matching_is_idempotent(self, index):
        """Test that the dedup state does not carry over between calls."""
        matcher = VulnerabilityMatcher(index)
        candidates = [CandidatePair("left-pad", "1.3.0"), CandidatePair("ngx-bootstrap", "18.1.4")]

        assert matcher.match(candidates) == matcher.match(candidates) == candidates

    def test_accepts_generators(self, index):
        candidates = (CandidatePair("left-pad", version) for version in ["1.2.0", "1.3.0"])

        assert match_candidates(candidates, index) == [CandidatePair("left-pad", "1.3.0")]

    def test_candidate_serialization(self):
        candidate = CandidatePair("@scope/pkg", "1.0.0")

        assert candidate.key == "@scope/pkg@1.0.0"
        assert candidate.to_dict() == {"packageName": "@scope/pkg", "version": "1.0.0"}
