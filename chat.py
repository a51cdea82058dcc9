# =============================================================================
# chat.py  —  Chat with your Notion workspace through the MCP server
# =============================================================================
#
# HOW TO RUN:
#   uv run python chat.py
#
# WHAT HAPPENS:
#   1. Creates the ADK agent (agent/notion_agent.py), which launches
#      main.py as a stdio MCP server
#   2. Opens an in-memory session
#   3. Sends each line you type to the agent and prints tool calls as they
#      happen, then the final answer
#
# Needs a Notion key (see main.py) and whatever key the LiteLlm model needs
# (OPENROUTER_API_KEY for the default model), e.g. in .env.
# =============================================================================

import asyncio

from dotenv import load_dotenv

load_dotenv()

from google.adk.runners import Runner
from google.adk.sessions import InMemorySessionService
from google.genai import types

from agent.notion_agent import create_agent

APP_NAME = "notion_assistant"
USER_ID = "local_user"


async def run_agent():
    """Run the Notion assistant interactively until the user quits."""
    print("=" * 70)
    print("  NOTION ASSISTANT")
    print("  Powered by Google ADK + FastMCP")
    print("=" * 70)
    print("\n🔧 Initializing agent...")
    agent = create_agent()

    session_service = InMemorySessionService()
    runner = Runner(agent=agent, app_name=APP_NAME, session_service=session_service)
    session = await session_service.create_session(app_name=APP_NAME, user_id=USER_ID)

    print("✅ Agent initialized and ready!\n")
    print("💬 Ask about your Notion workspace (type 'quit' to exit)\n")
    print("-" * 70)

    while True:
        try:
            user_input = input("\n🧑 You: ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\n\n👋 Goodbye!")
            break

        if user_input.lower() in ("quit", "exit", "q"):
            print("\n👋 Goodbye!")
            break

        if not user_input:
            continue

        user_message = types.Content(role="user", parts=[types.Part(text=user_input)])

        print("\n🤖 Agent is thinking...\n")
        print("-" * 70)

        final_response = ""
        async for event in runner.run_async(
            user_id=USER_ID,
            session_id=session.id,
            new_message=user_message,
        ):
            if event.content and event.content.parts:
                for part in event.content.parts:
                    if getattr(part, "text", None):
                        final_response = part.text
                    if getattr(part, "function_call", None):
                        print(f"  🔧 Calling tool: {part.function_call.name}")

        print("-" * 70)
        if final_response:
            print(f"\n🤖 Agent:\n\n{final_response}")
        else:
            print("\n⚠️  No response generated. The agent may have encountered an error.")


if __name__ == "__main__":
    asyncio.run(run_agent())
