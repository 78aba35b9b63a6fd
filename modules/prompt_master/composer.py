"""
Model instruction composition.

Turns a GenerationRequest into the system instruction and user prompt sent
to the model, with style lexicon, cardinality, continuity and transition
constraints.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from shared.errors import ValidationError
from shared.logging import get_logger
from shared.models.prompt import AutoStyle, ExplicitStyle, GenerationRequest, ReferenceImage

from .style_lexicon import StyleProfile, describe_catalogue, get_style_profile, style_keywords

logger = get_logger("prompt_master")


@dataclass(frozen=True)
class ModelInstruction:
    system_instruction: str
    prompt: str
    image_count: int
    video_count: int
    style_label: str
    reference_images: List[ReferenceImage] = field(default_factory=list)


def compose(request: GenerationRequest) -> ModelInstruction:
    """
    Build the model instruction for a normalized request.

    Raises:
        ValidationError: If the style selection is not a known variant
    """
    style_section = _build_style_section(request)

    sections = [
        _build_subject_section(request),
        style_section,
        _build_continuity_section(request),
        _build_transition_section(request),
    ]
    if request.reference_images:
        sections.append(_build_reference_section(len(request.reference_images)))
    sections.append(_build_output_section(request.count))

    instruction = ModelInstruction(
        system_instruction=_build_system_instruction(),
        prompt="\n\n".join(sections),
        image_count=request.count,
        video_count=request.video_count,
        style_label=request.style.label,
        reference_images=list(request.reference_images),
    )
    logger.debug(
        "Composed model instruction",
        extra={
            "image_count": instruction.image_count,
            "video_count": instruction.video_count,
            "style": instruction.style_label,
            "reference_images": len(instruction.reference_images),
            "prompt_chars": len(instruction.prompt),
        },
    )
    return instruction


def _build_system_instruction() -> str:
    return """You are an elite prompt engineer for Veo text/image-to-video generation.

You design multi-shot sequences: a series of still-frame image prompts that form one
continuous story, plus video prompts that animate the transition between each pair of
adjacent frames.

Guidelines:
- Write every prompt in English, as one rich descriptive paragraph.
- Describe subject, environment, composition, lighting and lens for image prompts.
- Describe motion, camera movement, lighting change or time-lapse action for video prompts.
- No bullet lists, no numbering, no shot labels, no ALL CAPS inside prompts.
- Never include URLs or file names.
- Return only JSON matching the requested schema."""


def _build_subject_section(request: GenerationRequest) -> str:
    if request.title:
        return f"""TITLE: "{request.title}"
The title names the subject and the story. It may be written in any language; keep its meaning."""
    return """TITLE: (none provided)
Infer the subject and the story entirely from the attached reference images."""


def _build_style_section(request: GenerationRequest) -> str:
    style = request.style
    if isinstance(style, AutoStyle):
        return f"""STYLE: Auto
Infer the most fitting visual style from the title and/or the reference images instead of
using a fixed one. Choose one of these styles, or a close variation when none fits:
{describe_catalogue()}
Apply the chosen style consistently to every prompt and name it in analysis.actionType."""
    if isinstance(style, ExplicitStyle):
        return _describe_profile(get_style_profile(style.kind), style_keywords(style.kind))
    raise ValidationError(f"Unsupported style selection: {style!r}")


def _describe_profile(profile: StyleProfile, keywords: List[str]) -> str:
    lines = [
        f"STYLE: {profile.label}",
        f"Look: {profile.description}.",
        f"Style keywords (weave them in naturally): {', '.join(keywords)}.",
        f"Lighting: {profile.lighting}.",
        f"Camera: {profile.camera}.",
    ]
    if profile.arc:
        start, end = profile.arc
        lines.append(f"Narrative arc: from {start} to {end}.")
    if profile.negative_cues:
        lines.append(
            "Early frames show the negative state clearly "
            f"({', '.join(profile.negative_cues)}); later frames remove it step by step."
        )
    return "\n".join(lines)


def _build_continuity_section(request: GenerationRequest) -> str:
    count = request.count
    base = f"""CONTINUITY:
- All {count} image prompts depict the SAME subject in the SAME scene, not independent or unrelated shots.
- Each image is a later moment of one single narrative arc; progress moves forward monotonically from image 1 to image {count}.
- Keep location, key objects, materials and viewpoint recognizably consistent so the frames read as one sequence."""

    transformation = _transformation_rule(request)
    if transformation:
        base += f"\n- {transformation}"
    if count == 1:
        base += "\n- With a single image, capture the defining moment of the story in one frame."
    return base


def _transformation_rule(request: GenerationRequest) -> str:
    style = request.style
    if isinstance(style, ExplicitStyle):
        profile = get_style_profile(style.kind)
        if profile.negative_cues and profile.arc:
            start, end = profile.arc
            return (
                f"This is a transformation: image 1 shows the initial {start}; "
                f"the last image shows the final {end}; intermediate images show partial progress."
            )
        return ""
    return (
        "If the story is a transformation (cleanup, renovation, repair, build), image 1 shows the "
        "initial disordered or negative state and the last image shows the final ordered, positive state."
    )


def _build_transition_section(request: GenerationRequest) -> str:
    if request.video_count == 0:
        return """TRANSITIONS:
There is only one image, so return an empty videoPrompts list."""
    return f"""TRANSITIONS:
- Write exactly {request.video_count} video prompts; video prompt i bridges image i to image i+1.
- Each video prompt describes camera motion, a lighting change, or time-lapse action that carries the scene from the first frame to the second.
- Never restate either image prompt verbatim; describe the change, not the frames."""


def _build_reference_section(image_count: int) -> str:
    noun = "image is" if image_count == 1 else f"{image_count} images are"
    return f"""REFERENCE IMAGES:
The attached {noun} grounding context for subject, materials, setting and palette.
Use them as inspiration; they are not required literal subjects and need not appear unchanged."""


def _build_output_section(count: int) -> str:
    video_count = count - 1
    return f"""OUTPUT:
Return a JSON object with exactly this shape:
{{
  "imagePrompts": [{count} strings, in story order],
  "videoPrompts": [{video_count} strings, transition i connects image i and image i+1],
  "analysis": {{
    "subject": "the main subject of the sequence",
    "actionType": "the kind of action or process and the chosen style",
    "progression": "one sentence describing how the story advances from start to end"
  }}
}}
CRITICAL: imagePrompts MUST contain exactly {count} items and videoPrompts exactly {video_count} items."""
