"""
Application configuration (env, settings, constants).

Responsibility: Centralize config loading, environment variables, and app-wide
constants. Keeps the rest of the app decoupled from how config is sourced.
"""

import os

from dotenv import load_dotenv

load_dotenv()

# HTTP server
PORT: int = int(os.getenv("PORT", "3000"))
CORS_ORIGINS: list[str] = [
    o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()
]

# MongoDB (chat and error logs)
MONGODB_URI: str = os.getenv("MONGODB_URI", "").strip()
MONGO_DB_NAME: str = os.getenv("MONGO_DB_NAME", "chatbot").strip() or "chatbot"
CHAT_LOG_COLLECTION: str = "chatlogs"
ERROR_LOG_COLLECTION: str = "errorlogs"
MONGO_TIMEOUT_MS: int = 5000

# Milvus Cloud (from env)
MILVUS_URI: str = os.getenv("MILVUS_URI", "").strip()
MILVUS_TOKEN: str = os.getenv("MILVUS_TOKEN", "").strip()

# Milvus collection holding the persona documents (populated out of band)
COLLECTION_NAME: str = os.getenv("MILVUS_COLLECTION", "documents").strip() or "documents"
MILVUS_TEXT_FIELD: str = os.getenv("MILVUS_TEXT_FIELD", "text").strip() or "text"

# Hugging Face (query embeddings / fallback LLM)
HF_API_KEY: str = os.getenv("HF_API_KEY", "").strip()
HF_EMBED_MODEL: str = "sentence-transformers/all-MiniLM-L6-v2"

# Number of passages joined into the answer context
CONTEXT_TOP_K: int = 3

# API timeouts (seconds)
EMBED_API_TIMEOUT: float = 30.0
LLM_API_TIMEOUT: float = 60.0

# Hugging Face chat (fallback LLM)
HF_CHAT_URL: str = "https://router.huggingface.co/v1/chat/completions"

# Generation
LLM_TEMPERATURE: float = 0.2
LLM_MAX_TOKENS: int = 512

# OpenAI (pipeline LLM). When set, the pipeline uses OpenAI instead of Hugging Face.
OPENAI_API_KEY: str = os.getenv("OPENAI_API_KEY", "").strip()
OPENAI_LLM_MODEL: str = (
    os.getenv("OPENAI_LLM_MODEL", "gpt-4o-mini").strip() or "gpt-4o-mini"
)

# HF LLM (fallback when OPENAI_API_KEY is not set). Router chat completions require a chat model.
HF_LLM_MODEL: str = (
    os.getenv("HF_LLM_MODEL", "meta-llama/Llama-3.2-3B-Instruct").strip()
    or "meta-llama/Llama-3.2-3B-Instruct"
)

# Optional prompt overrides: paths to text files with {question} / {context} placeholders
STANDALONE_PROMPT_PATH: str = os.getenv("STANDALONE_PROMPT_PATH", "").strip()
ANSWER_PROMPT_PATH: str = os.getenv("ANSWER_PROMPT_PATH", "").strip()
