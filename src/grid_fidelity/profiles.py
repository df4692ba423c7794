from dataclasses import dataclass, replace

from grid_fidelity.constants import (
    LOOSE_DATE_TOLERANCE_MS,
    PROFILE_FULL,
    PROFILE_PLAIN_TEXT,
    PROFILE_REDUCED_MODEL,
    STRICT_DATE_TOLERANCE_MS,
)

__all__ = [
    "FULL",
    "FidelityProfile",
    "PLAIN_TEXT",
    "PROFILES",
    "REDUCED_MODEL",
]


@dataclass(frozen=True)
class FidelityProfile:
    """
    The features a document representation preserves.

    Features that a profile does not support are either skipped by the
    checkers or expected to have degraded in a fixed way: formulas become
    their cached result and hyperlinks their target.

    Parameters
    ----------
    name: str
        The profile's name, e.g. ``"full"``.
    supports_formulas: bool
        Formula and hyperlink values are preserved.
    supports_merges: bool
        Merged ranges and their masters are preserved.
    supports_styles: bool
        Number formats, fonts, borders, fills, alignments and row heights are
        preserved.
    supports_bad_alignment_rejection: bool
        Invalid alignments are dropped when the document is written.
    supports_sheet_properties: bool
        Outline levels, sheet properties and page setup are preserved.
    supports_views: bool
        Document views are preserved.
    preserves_sheet_names: bool
        Sheet names are preserved; otherwise the first sheet is named
        ``"sheet1"``.
    date_tolerance_ms: int
        The largest difference between an expected and an actual date, in
        milliseconds.
    """

    name: str
    supports_formulas: bool = True
    supports_merges: bool = True
    supports_styles: bool = True
    supports_bad_alignment_rejection: bool = True
    supports_sheet_properties: bool = True
    supports_views: bool = True
    preserves_sheet_names: bool = True
    date_tolerance_ms: int = STRICT_DATE_TOLERANCE_MS

    @property
    def check_bad_alignments(self) -> bool:
        """bool: ``True`` if cells with invalid alignments must have no alignment."""
        return self.supports_styles and self.supports_bad_alignment_rejection

    @classmethod
    def named(cls, name: str, use_styles: bool = True) -> "FidelityProfile":
        """
        Return one of the preset profiles by name.

        Parameters
        ----------
        name: str
            One of ``"full"``, ``"reduced-model"`` or ``"plain-text"``.
        use_styles: bool, optional, default: ``True``
            If ``False``, style checks are disabled.

        Raises
        ------
        KeyError:
            If the name is not a preset profile.
        """
        if name not in PROFILES:
            raise KeyError(f"unknown profile '{name}'")
        profile = PROFILES[name]
        if not use_styles:
            profile = replace(profile, supports_styles=False)
        return profile


FULL = FidelityProfile(PROFILE_FULL)

REDUCED_MODEL = FidelityProfile(PROFILE_REDUCED_MODEL, supports_bad_alignment_rejection=False)

PLAIN_TEXT = FidelityProfile(
    PROFILE_PLAIN_TEXT,
    supports_formulas=False,
    supports_merges=False,
    supports_styles=False,
    supports_bad_alignment_rejection=False,
    supports_sheet_properties=False,
    supports_views=False,
    preserves_sheet_names=False,
    date_tolerance_ms=LOOSE_DATE_TOLERANCE_MS,
)

PROFILES = {profile.name: profile for profile in [FULL, REDUCED_MODEL, PLAIN_TEXT]}
