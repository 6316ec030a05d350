from typing import Optional

from langchain_google_genai import ChatGoogleGenerativeAI

from lib import config


# define model configuration
MODEL_CONFIG = {
    "model": config.GEMINI_MODEL,
    "temperature": 0.3,
    "max_output_tokens": 1024,
    "top_p": 0.8,
    "top_k": 40,
}


def get_gemini(api_key: Optional[str] = None) -> Optional[ChatGoogleGenerativeAI]:
    """Build the Gemini chat model, or return None when no API key is configured."""
    key = api_key or config.GEMINI_API_KEY
    if not key:
        return None
    return ChatGoogleGenerativeAI(
        model=MODEL_CONFIG["model"],
        google_api_key=key,
        temperature=MODEL_CONFIG["temperature"],
        max_output_tokens=MODEL_CONFIG["max_output_tokens"],
        top_p=MODEL_CONFIG["top_p"],
        top_k=MODEL_CONFIG["top_k"],
    )


if __name__ == "__main__":
    model = get_gemini()
    if model is None:
        print("GEMINI_API_KEY is not set.")
    else:
        print(model.invoke("Summarize: the project shipped v2 on Jan 17.").content)
