import asyncio
from typing import List

from openai import AsyncOpenAI

from chat_tools import (
    ChatRequest,
    ChatSession,
    LanguageContext,
    MessageRenderer,
    OpenAITextModel,
    RenderedView,
    TranslateTextTool,
    build_default_registry,
    create_http_client,
    load_settings,
    setup_logging,
)
from chat_tools.core.exceptions import UnknownLanguageError
from chat_tools.core.messages import BaseMessage


async def main() -> None:
    """
    Main function to run the CLI chat. ``/lang <code>`` switches the answer language.
    """
    print("Welcome to the CLI Chat!")
    setup_logging()
    settings = load_settings()

    if not settings.openai_api_key:
        print("Error: OPENAI_API_KEY not found in environment variables.")
        return

    client = AsyncOpenAI(api_key=settings.openai_api_key, base_url=settings.openai_base_url)
    model = OpenAITextModel(client, settings.model_name)
    languages = LanguageContext(default_code=settings.source_language)
    renderer = MessageRenderer(languages, source_language_code=settings.source_language)

    async with create_http_client(settings) as http_client:
        session = ChatSession(
            client=client,
            model_name=settings.model_name,
            sys_instruction="You are a helpful assistant. Use summarizeUrl when the user asks about a web page.",
            registry=build_default_registry(http_client, model, settings),
            translator=TranslateTextTool(model, source_language=settings.source_language),
            max_function_loops=settings.max_function_loops,
        )
        history: List[BaseMessage] = []

        print("\nStart chatting! Type 'exit' or 'quit' to stop, '/lang <code>' to change language.")
        while True:
            user_input = input("\nYou: ").strip()
            if user_input.lower() in ["exit", "quit"]:
                print("Goodbye!")
                break

            if not user_input:
                continue

            if user_input.startswith("/lang"):
                code = user_input.removeprefix("/lang").strip()
                try:
                    print(f"Answers will be shown in {languages.select(code).display_name}.")
                except UnknownLanguageError as e:
                    print(e)
                continue

            request = ChatRequest.from_context(user_input, languages)
            try:
                async for message in session.stream(request, history):
                    for view in renderer.render_message(message):
                        if isinstance(view, RenderedView):
                            print(f"[{view.state.value}] {view.heading} {view.body or ''}".rstrip())
                        else:
                            print(f"Assistant: {view.text}")
                            for note in (view.annotation, view.error_notice):
                                if note:
                                    print(f"  ({note})")
            except Exception as e:
                print(f"An error occurred: {e}")


if __name__ == "__main__":
    asyncio.run(main())
