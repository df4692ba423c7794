import dataclasses

import pytest

from grid_fidelity import FULL, PLAIN_TEXT, PROFILES, REDUCED_MODEL, FidelityProfile


def test_presets():
    assert list(PROFILES) == ["full", "reduced-model", "plain-text"]

    assert FULL.supports_formulas
    assert FULL.supports_merges
    assert FULL.supports_styles
    assert FULL.supports_bad_alignment_rejection
    assert FULL.supports_sheet_properties
    assert FULL.supports_views
    assert FULL.preserves_sheet_names
    assert FULL.date_tolerance_ms == 3
    assert FULL.check_bad_alignments

    assert REDUCED_MODEL == dataclasses.replace(
        FULL, name="reduced-model", supports_bad_alignment_rejection=False
    )
    assert not REDUCED_MODEL.check_bad_alignments

    assert not PLAIN_TEXT.supports_formulas
    assert not PLAIN_TEXT.supports_merges
    assert not PLAIN_TEXT.supports_styles
    assert not PLAIN_TEXT.supports_sheet_properties
    assert not PLAIN_TEXT.supports_views
    assert not PLAIN_TEXT.preserves_sheet_names
    assert PLAIN_TEXT.date_tolerance_ms == 1000


def test_named():
    assert FidelityProfile.named("full") is FULL
    assert FidelityProfile.named("plain-text") is PLAIN_TEXT

    profile = FidelityProfile.named("full", use_styles=False)
    assert profile.name == "full"
    assert not profile.supports_styles
    assert not profile.check_bad_alignments
    assert profile.supports_formulas

    with pytest.raises(KeyError) as e:
        _ = FidelityProfile.named("xlsx")
    assert "unknown profile 'xlsx'" in str(e.value)


def test_profiles_are_immutable():
    with pytest.raises(dataclasses.FrozenInstanceError):
        FULL.supports_styles = False
