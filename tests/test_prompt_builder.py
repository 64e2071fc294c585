"""Tests for panel, refinement and shot-list prompt construction."""

import pytest
from hypothesis import given, settings, strategies as st

from app.services.prompt_builder import (
    DEFAULT_MOOD,
    DEFAULT_VISUAL_STYLE,
    PANEL_PREAMBLE,
    PANEL_REQUIREMENTS,
    build_panel_prompt,
    build_refinement_prompt,
    build_shot_suggestion_prompt,
    shot_suggestion_system_prompt,
)
from app.services.types import PreviousShot, RefinementInput, ShotDescriptionInput, ShotSuggestionInput


class TestBuildPanelPrompt:
    def test_minimal_input(self):
        prompt = build_panel_prompt(ShotDescriptionInput(shot_description="A door creaks open"))
        assert prompt == (
            f"{PANEL_PREAMBLE} ACTION: A door creaks open. "
            f"VISUAL STYLE: {DEFAULT_VISUAL_STYLE}. MOOD: {DEFAULT_MOOD}. {PANEL_REQUIREMENTS}"
        )

    def test_end_to_end_scenario_sections(self):
        prompt = build_panel_prompt(
            ShotDescriptionInput(
                shot_description="A lone figure walks through rain",
                shot_type="WS",
                camera_angle="Low Angle",
            )
        )
        assert "ACTION: A lone figure walks through rain." in prompt
        assert "SHOT TYPE: WS." in prompt
        assert "CAMERA ANGLE: Low Angle." in prompt

    def test_section_order(self):
        prompt = build_panel_prompt(
            ShotDescriptionInput(
                shot_description="She turns to face the window",
                character_references=("MARA", "JONAS"),
                environment_references=("Lighthouse interior",),
                shot_type="MCU",
                camera_angle="Eye Level",
                visual_style="Charcoal",
                mood="Tense",
                aspect_ratio="2.39:1",
                director_notes="Keep her face in shadow",
            )
        )
        markers = [
            "Production-Grade Storyboard Frame.",
            "CHARACTERS: MARA, JONAS.",
            "LOCATION: Lighthouse interior.",
            "SHOT TYPE: MCU.",
            "CAMERA ANGLE: Eye Level.",
            "ACTION: She turns to face the window.",
            "VISUAL STYLE: Charcoal.",
            "MOOD: Tense.",
            "ASPECT RATIO: 2.39:1.",
            "DIRECTOR OVERRIDE: Keep her face in shadow. THIS RULE TAKES PRECEDENCE OVER ALL OTHERS.",
            "REQUIREMENTS:",
        ]
        positions = [prompt.index(marker) for marker in markers]
        assert positions == sorted(positions)

    def test_visual_style_beats_style(self):
        prompt = build_panel_prompt(ShotDescriptionInput(shot_description="x", style="anime", visual_style="Ink wash"))
        assert "VISUAL STYLE: Ink wash." in prompt
        assert "anime" not in prompt

    def test_style_used_when_visual_style_missing(self):
        prompt = build_panel_prompt(ShotDescriptionInput(shot_description="x", style="live-action"))
        assert "VISUAL STYLE: live-action." in prompt

    def test_reference_lists_keep_order_and_duplicates(self):
        prompt = build_panel_prompt(
            ShotDescriptionInput(shot_description="x", character_references=("B", "A", "B"))
        )
        assert "CHARACTERS: B, A, B." in prompt

    def test_absent_optional_fields_add_nothing(self):
        prompt = build_panel_prompt(ShotDescriptionInput(shot_description="x"))
        for label in ("CHARACTERS:", "LOCATION:", "SHOT TYPE:", "CAMERA ANGLE:", "ASPECT RATIO:", "DIRECTOR OVERRIDE:"):
            assert label not in prompt

    def test_prompt_is_deterministic(self):
        input = ShotDescriptionInput(shot_description="x", mood="Eerie", character_references=("A",))
        assert build_panel_prompt(input) == build_panel_prompt(input)


@pytest.mark.property
class TestPanelPromptProperties:
    @given(
        description=st.text(min_size=1, max_size=120),
        characters=st.lists(st.text(min_size=1, max_size=12), max_size=3),
        locations=st.lists(st.text(min_size=1, max_size=12), max_size=3),
        shot_type=st.one_of(st.none(), st.sampled_from(["WS", "MCU", "CU", "OTS"])),
        camera_angle=st.one_of(st.none(), st.sampled_from(["Eye Level", "Low Angle", "High Angle"])),
        mood=st.one_of(st.none(), st.text(max_size=12)),
    )
    @settings(max_examples=150, deadline=None)
    def test_description_is_verbatim_substring(self, description, characters, locations, shot_type, camera_angle, mood):
        prompt = build_panel_prompt(
            ShotDescriptionInput(
                shot_description=description,
                character_references=tuple(characters),
                environment_references=tuple(locations),
                shot_type=shot_type,
                camera_angle=camera_angle,
                mood=mood,
            )
        )
        assert f"ACTION: {description}." in prompt

    @given(
        description=st.text(min_size=1, max_size=60),
        notes=st.text(min_size=1, max_size=60),
        aspect_ratio=st.one_of(st.none(), st.sampled_from(["16:9", "2.39:1"])),
    )
    @settings(max_examples=150, deadline=None)
    def test_director_override_is_last_directive(self, description, notes, aspect_ratio):
        prompt = build_panel_prompt(
            ShotDescriptionInput(shot_description=description, director_notes=notes, aspect_ratio=aspect_ratio)
        )
        override = f"DIRECTOR OVERRIDE: {notes}. THIS RULE TAKES PRECEDENCE OVER ALL OTHERS."
        assert prompt.endswith(f"{override} {PANEL_REQUIREMENTS}")
        assert prompt.index("MOOD:") < prompt.rindex("DIRECTOR OVERRIDE:")

    @given(description=st.text(alphabet="abcdefghijklmnopqrstuvwxyz ,.'-", min_size=1, max_size=80))
    @settings(max_examples=100, deadline=None)
    def test_missing_references_never_add_labels(self, description):
        prompt = build_panel_prompt(ShotDescriptionInput(shot_description=description))
        assert "CHARACTERS:" not in prompt
        assert "LOCATION:" not in prompt


class TestBuildRefinementPrompt:
    def test_fixed_template(self):
        prompt = build_refinement_prompt(
            RefinementInput(refinement_prompt="Make the sky stormier", previous_panel_url="https://img.test/1.png")
        )
        assert prompt.startswith("Refine this storyboard panel: Make the sky stormier.")
        assert "Maintain the same style, composition, and visual consistency" in prompt
        assert "Only change what is specified" in prompt
        assert prompt.endswith("Keep it as a professional storyboard sketch, draft quality.")

    def test_previous_panel_url_is_not_forwarded(self):
        prompt = build_refinement_prompt(
            RefinementInput(
                refinement_prompt="Tighter framing",
                previous_panel_url="https://img.test/panel-42.png",
                style_reference_id="panel-41",
            )
        )
        assert "https://img.test/panel-42.png" not in prompt
        assert "panel-41" not in prompt


class TestBuildShotSuggestionPrompt:
    def test_scene_text_is_verbatim(self):
        scene = "INT. DINER - NIGHT\nMara slides into the booth. {She} doesn't look up."
        prompt = build_shot_suggestion_prompt(ShotSuggestionInput(scene_text=scene))
        assert f"SCENE CONTEXT:\n{scene}\n" in prompt

    def test_no_continuity_block_without_previous_shots(self):
        prompt = build_shot_suggestion_prompt(ShotSuggestionInput(scene_text="EXT. PIER - DAWN"))
        assert "PRECEDING SHOTS" not in prompt
        assert "EXT. PIER - DAWN\n\nDIRECTIVE:" in prompt

    def test_continuity_block_lists_previous_shots(self):
        previous = (
            PreviousShot(shot_number=1, shot_type="WS", description="Harbor at dawn"),
            PreviousShot(shot_number=2, shot_type="MCU", description="Mara watches the boats"),
        )
        prompt = build_shot_suggestion_prompt(ShotSuggestionInput(scene_text="scene", previous_shots=previous))
        assert (
            "PRECEDING SHOTS (Maintain Continuity):\n"
            "- Shot 1: WS | Harbor at dawn\n"
            "- Shot 2: MCU | Mara watches the boats\n"
            "\nDIRECTIVE:"
        ) in prompt
        assert prompt.index("SCENE CONTEXT:") < prompt.index("PRECEDING SHOTS") < prompt.index("DIRECTIVE:")

    def test_continuity_line_without_shot_number_uses_position(self):
        previous = (PreviousShot(shot_type="WS", description="Pier"), PreviousShot(description="Gulls"))
        prompt = build_shot_suggestion_prompt(ShotSuggestionInput(scene_text="scene", previous_shots=previous))
        assert "- Shot 1: WS | Pier\n" in prompt
        assert "- Shot 2:  | Gulls\n" in prompt
        assert "None" not in prompt

    def test_style_defaults_to_cinematic(self):
        prompt = build_shot_suggestion_prompt(ShotSuggestionInput(scene_text="scene"))
        assert "Use Cinematic style." in prompt

    def test_style_is_applied(self):
        prompt = build_shot_suggestion_prompt(ShotSuggestionInput(scene_text="scene", style="live-action"))
        assert "Use live-action style." in prompt

    def test_requests_three_to_six_shots_with_five_attributes(self):
        prompt = build_shot_suggestion_prompt(ShotSuggestionInput(scene_text="scene"))
        assert "Generate 3-6 key shots" in prompt
        for attribute in ("1. Shot Type", "2. Camera Angle", "3. Movement", "4. Visual Description", "5. Estimated Duration"):
            assert attribute in prompt

    def test_json_schema_template_is_last(self):
        prompt = build_shot_suggestion_prompt(ShotSuggestionInput(scene_text="scene"))
        assert prompt.index("DIRECTIVE:") < prompt.index("OUTPUT JSON FORMAT:")
        assert '"overall_confidence": 0.9' in prompt
        assert '"shot_number": 1' in prompt
        assert prompt.rstrip().endswith("}")


class TestSystemPrompt:
    def test_system_prompt_demands_json(self):
        system = shot_suggestion_system_prompt()
        assert system.startswith("You are an expert Script Supervisor and Director of Photography.")
        assert system.endswith("Output strictly valid JSON.")
