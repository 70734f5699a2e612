from langchain_core.prompts import PromptTemplate


FILTER_PROMPT = PromptTemplate.from_template(
"""You are a CSS filter expert. Your task is to generate CSS filter values to replicate a cinematic filter inspired by {style_name} style. {style_description}

Respond with a JSON object containing a single key "filter" whose value is the CSS string.

Example response:
{{
  "filter": "{example_filter}"
}}

Do not add any other text, markdown, or explanations outside of the JSON object."""
)

VIVID_WARM_STYLE = {
    "style_name": "iPhone's Vivid Warm",
    "style_description": (
        "This style increases color vibrancy, enriches warm tones, gently enhances "
        "contrast, and slightly reduces exposure for a moody yet natural look."
    ),
    "example_filter": "saturate(1.2) contrast(1.1) brightness(0.95) sepia(0.15) hue-rotate(-5deg)",
}

VIVID_WARM_PROMPT = FILTER_PROMPT.format(**VIVID_WARM_STYLE)
