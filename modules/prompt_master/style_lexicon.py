"""
Visual lexicon for each style.

Every StyleKind maps to one StyleProfile. Keywords are injected into the
model instruction so all prompts of a sequence share one look.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from shared.models.prompt import StyleKind


@dataclass(frozen=True)
class StyleProfile:
    label: str
    description: str
    keywords: List[str]
    lighting: str
    camera: str
    # Start and end state of a transformation arc, if the style implies one
    arc: Optional[tuple] = None
    negative_cues: List[str] = field(default_factory=list)


STYLE_LEXICON: Dict[StyleKind, StyleProfile] = {
    StyleKind.DOCUMENTARY: StyleProfile(
        label=StyleKind.DOCUMENTARY.value,
        description="observational documentary photography of real people and places",
        keywords=["documentary", "natural", "candid", "authentic textures", "handheld realism"],
        lighting="available natural light, soft practical sources, no stylized grading",
        camera="35mm handheld or tripod, eye-level framing, shallow depth of field on the subject",
    ),
    StyleKind.INDUSTRIAL: StyleProfile(
        label=StyleKind.INDUSTRIAL.value,
        description="industrial factory process showing raw material becoming a finished product",
        keywords=["industrial", "machinery", "process", "precision", "metallic"],
        lighting="hard overhead work lights, sparks and reflections on steel, cool factory tones",
        camera="macro details of tools and materials, tracking shots along the production line",
        arc=("raw material", "finished, inspected product"),
    ),
    StyleKind.LUXURY_EPOXY: StyleProfile(
        label=StyleKind.LUXURY_EPOXY.value,
        description="luxury interior art pieces and epoxy resin craftsmanship",
        keywords=["luxury", "epoxy resin", "glossy", "artisanal", "high-end interior"],
        lighting="controlled studio light, specular highlights on cured resin, warm accent lamps",
        camera="slow macro glides across surfaces, top-down pours, elegant wide reveals",
        arc=("bare substrate and liquid resin", "polished, installed art piece"),
    ),
    StyleKind.CONSTRUCTION: StyleProfile(
        label=StyleKind.CONSTRUCTION.value,
        description="real-life construction work captured on site",
        keywords=["construction", "real-life", "on-site", "workers", "building materials"],
        lighting="daylight on site, dust in the air, golden hour for the final reveal",
        camera="fixed site camera positions, wide establishing shots, close-ups of hands at work",
        arc=("empty or demolished site", "completed structure"),
    ),
    StyleKind.CINEMATIC: StyleProfile(
        label=StyleKind.CINEMATIC.value,
        description="cinematic film look with deliberate composition and grading",
        keywords=["cinematic", "anamorphic", "dramatic", "color graded", "film grain"],
        lighting="motivated key light, deep contrast, teal and amber grade",
        camera="dolly moves, crane reveals, 2.39:1 compositions",
    ),
    StyleKind.CLEANUP_RENOVATION: StyleProfile(
        label=StyleKind.CLEANUP_RENOVATION.value,
        description="mess-to-order transformation of a dirty, cluttered space into a cozy, tidy one",
        keywords=["transformation", "before and after", "decluttering", "renovation", "cozy"],
        lighting="dim, grey, harsh light at the start, warming to soft golden interior light at the end",
        camera="identical locked-off viewpoint across frames so the change reads clearly",
        arc=("dirty, cluttered, neglected space", "clean, organized, warm and cozy space"),
        negative_cues=["trash", "dust", "broken furniture", "stains"],
    ),
}


def get_style_profile(kind: StyleKind) -> StyleProfile:
    return STYLE_LEXICON[kind]


def style_keywords(kind: StyleKind, limit: int = 5) -> List[str]:
    """Canonical keywords for a style, deduplicated and capped."""
    keywords: List[str] = []
    for keyword in STYLE_LEXICON[kind].keywords:
        token = keyword.strip().lower()
        if token and token not in keywords:
            keywords.append(token)
    return keywords[:limit]


def describe_catalogue() -> str:
    """One line per known style, used when the model must choose a style itself."""
    lines = []
    for profile in STYLE_LEXICON.values():
        lines.append(f"- {profile.label}: {profile.description}")
    return "\n".join(lines)
