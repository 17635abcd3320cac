"""Built-in caption style presets."""

from __future__ import annotations

from typing import Any, Dict, List


def builtin_presets() -> List[Dict[str, Any]]:
    return [
        {
            "id": "builtin:viral-sentence",
            "name": "Viral Sentence",
            "style": {
                "animation": "reveal_words_viral",
                "font_family": "Montserrat",
                "font_size": 50,
                "alternate_colors": ["#31F40B", "#FF2121", "#FEE01D", "#00FFFF"],
                "alternate_shadow_colors": ["#51FF2B", "#B31419", "#FEE01D", "#00FFFF"],
                "shadow_strength": 1.5,
                "vertical_position": 70,
            },
        },
        {
            "id": "builtin:word-by-word",
            "name": "Word by Word",
            "style": {
                "animation": "word_by_word",
                "font_family": "Montserrat",
                "font_size": 60,
                "color": "#FFFFFF",
                "text_outline_color": "#000000",
                "text_outline_width": 3,
                "shadow_strength": 1,
                "vertical_position": 60,
            },
        },
        {
            "id": "builtin:highlight",
            "name": "Yellow Highlight",
            "style": {
                "animation": "highlight_single",
                "font_family": "Arial",
                "font_size": 48,
                "color": "#FFFF00",
                "text_outline_color": "#000000",
                "text_outline_width": 2,
                "shadow_strength": 2,
                "vertical_position": 75,
            },
        },
        {
            "id": "builtin:stacked-pairs",
            "name": "Stacked Pairs",
            "style": {
                "animation": "alternating_pairs",
                "font_family": "Montserrat",
                "font_size": 52,
                "text_outline_color": "#000000",
                "text_outline_width": 2,
                "vertical_position": 65,
            },
        },
        {
            "id": "builtin:boxed",
            "name": "Boxed Reveal",
            "style": {
                "animation": "trending_box",
                "font_family": "Arial",
                "font_size": 42,
                "background_color": "#FFFFFF",
                "vertical_position": 80,
            },
        },
        {
            "id": "builtin:shake",
            "name": "Impact Shake",
            "style": {
                "animation": "impact",
                "animation2": "Shake",
                "font_family": "Impact",
                "font_size": 64,
                "text_outline_color": "#000000",
                "text_outline_width": 4,
                "shadow_strength": 2,
                "vertical_position": 50,
            },
        },
        {
            "id": "builtin:plain",
            "name": "Plain",
            "style": {
                "animation": "plain",
                "font_family": "Arial",
                "font_size": 42,
                "background_color": "rgba(0, 0, 0, 0.6)",
                "vertical_position": 85,
            },
        },
    ]
