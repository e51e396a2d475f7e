"""
Prompt templates and fixed fallback answers for the question pipeline.

Templates are plain text with named placeholders ({question}, {context}). The
defaults below describe the persona; either template can be swapped for a file
via STANDALONE_PROMPT_PATH / ANSWER_PROMPT_PATH without touching code.
"""

import logging
from pathlib import Path

from langchain_core.prompts import PromptTemplate

logger = logging.getLogger(__name__)

STANDALONE_VARIABLES = ("question",)
ANSWER_VARIABLES = ("context", "question")

CONTACT_EMAIL = "navneetkumar.learn@gmail.com"

NO_CONTEXT_ANSWER = (
    "I'm sorry, I don't know the answer to that. "
    f"Please email **{CONTACT_EMAIL}** for further assistance."
)

FAILURE_ANSWER = (
    "Sorry, I'm having trouble answering that right now. Please try again later. "
    f"Contact {CONTACT_EMAIL} for urgent queries."
)

_PERSONA = (
    "You are a friendly and helpful support bot designed to answer questions related to the "
    "personal, professional, family, friends, education, skills, health and aims of Navneet Kumar "
    "based on the provided context."
)

DEFAULT_STANDALONE_TEMPLATE = (
    _PERSONA
    + " Convert the given question into a standalone question that contains all necessary context.\n"
    "\n"
    "Original Question: {question}\n"
    "Standalone Question:\n"
)

DEFAULT_ANSWER_TEMPLATE = (
    _PERSONA
    + " Do your best to find the answer within the given context. "
    'If the question is out of context or the answer isn\'t in the context, simply say "'
    + NO_CONTEXT_ANSWER
    + '"\n'
    "Avoid making up answers and use relevant emojis where applicable and appropriate.\n"
    "Always respond in a casual, friendly tone as if you're chatting with a friend.\n"
    "If anyone says hi, hello or any other greeting, respond with a greeting and ask what they "
    "want to ask Navneet Kumar.\n"
    "Complete the answer within 3 lines (50-75 words).\n"
    "Context: {context}\n"
    "Question: {question}\n"
    "Answer:\n"
)


def _checked(prompt: PromptTemplate, required: tuple[str, ...]) -> PromptTemplate:
    """Reject templates that could not be filled with exactly the required values."""
    variables = set(prompt.input_variables)
    unnamed = sorted(v for v in variables if not v.isidentifier())
    if unnamed:
        raise ValueError(f"Prompt template has positional or empty placeholders: {unnamed}")
    missing = set(required) - variables
    if missing:
        raise ValueError(f"Prompt template is missing placeholders: {sorted(missing)}")
    unexpected = variables - set(required)
    if unexpected:
        raise ValueError(f"Prompt template has unknown placeholders: {sorted(unexpected)}")
    try:
        prompt.format(**{name: "" for name in required})
    except (IndexError, KeyError) as e:
        raise ValueError(f"Prompt template cannot be filled: {e!r}") from e
    return prompt


def build_prompt(template: str, required: tuple[str, ...]) -> PromptTemplate:
    return _checked(PromptTemplate.from_template(template), required)


def load_prompt_file(path: str | Path, required: tuple[str, ...]) -> PromptTemplate:
    prompt = PromptTemplate.from_file(path, encoding="utf-8")
    logger.info("[prompts:load_prompt_file] loaded template path=%s variables=%s", path, prompt.input_variables)
    return _checked(prompt, required)


def load_standalone_prompt(path: str = "") -> PromptTemplate:
    """Standalone-question template; default persona unless a file path is given."""
    if path:
        return load_prompt_file(path, STANDALONE_VARIABLES)
    return build_prompt(DEFAULT_STANDALONE_TEMPLATE, STANDALONE_VARIABLES)


def load_answer_prompt(path: str = "") -> PromptTemplate:
    """Grounded-answer template; default persona unless a file path is given."""
    if path:
        return load_prompt_file(path, ANSWER_VARIABLES)
    return build_prompt(DEFAULT_ANSWER_TEMPLATE, ANSWER_VARIABLES)
