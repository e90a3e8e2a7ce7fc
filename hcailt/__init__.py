"""
HCAILT Backend: LLM gateway for medical text translation

A small FastAPI service that sits between the browser client and several
LLM providers (OpenAI, Google, Groq, Fireworks) to run the medical
translation workflow: domain check, translation, plain-language
simplification and quality estimation.
"""

__version__ = "0.1.0"
