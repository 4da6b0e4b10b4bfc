import json
from typing import List, NamedTuple

from translate_code.config import (INPUT_TAG_IN, INPUT_TAG_OUT,
                                   TRANSLATE_TAG_IN, TRANSLATE_TAG_OUT)


class PromptPair(NamedTuple):
    """A pair of system and user prompts for LLM translation."""
    system: str
    user: str


# ============================================================================
# SHARED PROMPT SECTIONS
# ============================================================================

def _get_output_format_section(
    translate_tag_in: str,
    translate_tag_out: str,
    input_tag_in: str,
    input_tag_out: str,
    item_count: int
) -> str:
    """
    Generate the output format instructions for a JSON batch.

    Args:
        translate_tag_in: Opening tag for translation output
        translate_tag_out: Closing tag for translation output
        input_tag_in: Opening tag for input text
        input_tag_out: Closing tag for input text
        item_count: Number of strings the answer must contain

    Returns:
        str: Formatted output format instructions
    """
    return f"""# OUTPUT FORMAT

**CRITICAL OUTPUT RULES:**
1. The text between "{input_tag_in}" and "{input_tag_out}" is a JSON array of {item_count} strings
2. Answer with a JSON array of EXACTLY {item_count} translated strings, in the SAME ORDER
3. Never merge, split, drop or reorder items, even when an item looks like a fragment
4. Your response MUST start with {translate_tag_in} and end with {translate_tag_out}
5. Do NOT add explanations, comments, notes, or greetings

**INCORRECT examples (DO NOT do this):**
❌ "Here is the translation: {translate_tag_in}[...]{translate_tag_out}"
❌ {translate_tag_in}["Bonjour le monde"]{translate_tag_out} when the input had 2 items
❌ ["Bonjour", "Monde"] (missing tags entirely)

**CORRECT format (ONLY this):**
✅ {translate_tag_in}
["first translated item", "second translated item"]
{translate_tag_out}
"""


TECHNICAL_CONTENT_SECTION = """
**Technical Content (DO NOT TRANSLATE):**
- Code snippets and identifiers: `function()`, `variable_name`, `MyComponent`
- URLs and file paths: `https://example.com`, `/assets/logo.png`
- HTML entities and escapes: `&amp;`, `&nbsp;`, `&#169;`
- Placeholders and template markers: `{name}`, `%s`, `{{ user }}`"""


# ============================================================================
# BATCH PROMPT
# ============================================================================

def build_batch_prompt(
    texts: List[str],
    source_language: str,
    target_language: str
) -> PromptPair:
    """
    Build the prompt pair translating a whole batch of interface strings at once.

    The strings come from a web page (visible text and accessibility
    attributes) and are sent as a single JSON array so the answer can be
    matched back by position.

    Args:
        texts: Ordered source strings
        source_language: Source language name or code
        target_language: Target language name or code

    Returns:
        PromptPair: (system, user) prompts
    """
    output_format_section = _get_output_format_section(
        TRANSLATE_TAG_IN, TRANSLATE_TAG_OUT, INPUT_TAG_IN, INPUT_TAG_OUT, len(texts)
    )

    system_prompt = f"""You are a professional {target_language} translator specialised in website localisation.

# CRITICAL: TARGET LANGUAGE IS {target_language.upper()}

**Translate from {source_language} to {target_language}.**

# TRANSLATION PRINCIPLES

- Each item is user-visible text taken from an HTML page: headings, paragraphs, buttons, image alt texts, tooltips, form placeholders
- Translate each item on its own, keeping its tone and length close to the original
- Keep leading capitals, punctuation and numbers where the target language allows it
- Items may be short fragments of a sentence split by inline markup: translate them so they still read naturally side by side
{TECHNICAL_CONTENT_SECTION}

{output_format_section}"""

    user_prompt = f"""# TEXT TO TRANSLATE ({len(texts)} items)

{INPUT_TAG_IN}
{json.dumps(texts, ensure_ascii=False, indent=2)}
{INPUT_TAG_OUT}

REMINDER: Answer with exactly {len(texts)} {target_language} strings as a JSON array between {TRANSLATE_TAG_IN} and {TRANSLATE_TAG_OUT}."""

    return PromptPair(system=system_prompt, user=user_prompt)
