"""
LLM logging utilities for debugging and transparency

Provides utilities to log LLM interactions (prompts and responses)
when DEBUG_MODE is enabled.
"""
import os
from typing import Optional
from translate_code.config import DEBUG_MODE


def log_llm_interaction(
    system_prompt: Optional[str],
    user_prompt: str,
    raw_response: str,
    interaction_type: str = "translation",
    prefix: str = ""
):
    """
    Log full LLM interaction details when DEBUG_MODE is enabled.

    Shows exactly what is sent to a backend and what it answered, before
    the batch is extracted from the answer.

    Args:
        system_prompt: The system prompt (role/instructions)
        user_prompt: The user prompt (batch to translate)
        raw_response: Raw LLM response before extraction
        interaction_type: Type of interaction (e.g., "batch translation")
        prefix: Optional prefix for log messages (e.g., "Groq Cloud -> Arabic")
    """
    if not DEBUG_MODE:
        return

    # ANSI color codes
    YELLOW = '\033[93m'
    ORANGE = '\033[38;5;214m'  # input sent to the LLM
    GREEN = '\033[92m'         # output from the LLM
    GRAY = '\033[90m'
    ENDC = '\033[0m'
    BOLD = '\033[1m'

    if os.environ.get('NO_COLOR'):
        YELLOW = ORANGE = GREEN = GRAY = ENDC = BOLD = ''

    separator = "=" * 80
    rule = f"{GRAY}{'-' * 80}{ENDC}"
    prefix_str = f"[{prefix}] " if prefix else ""

    print(f"\n{YELLOW}{BOLD}{separator}{ENDC}")
    print(f"{YELLOW}{BOLD}DEBUG: {prefix_str}LLM Interaction - {interaction_type.upper()}{ENDC}")
    print(f"{YELLOW}{BOLD}{separator}{ENDC}\n")

    if system_prompt:
        print(f"{ORANGE}{BOLD}System Prompt:{ENDC}")
        print(rule)
        print(f"{ORANGE}{system_prompt}{ENDC}")
        print(f"{rule}\n")

    print(f"{ORANGE}{BOLD}User Prompt:{ENDC}")
    print(rule)
    print(f"{ORANGE}{user_prompt}{ENDC}")
    print(f"{rule}\n")

    print(f"{GREEN}{BOLD}Raw Response:{ENDC}")
    print(rule)
    print(f"{GREEN}{raw_response}{ENDC}")
    print(f"{rule}\n")

    print(f"{YELLOW}{BOLD}{separator}{ENDC}\n")
