"""
Travel GenAI package.

Provides:
- Ollama inference client (connection checks, model pulls, generation)
- Prompt builders and label-prefixed reply extraction
- Weather, trip-plan and money-saving-tip services behind a FastAPI app
"""
