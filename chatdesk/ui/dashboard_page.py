"""Activity overview page: global usage and the visitor's own chat statistics."""

from nicegui import app, ui

from chatdesk.identity import resolve_user_key
from chatdesk.storage.backend import get_storage
from chatdesk.storage.session_store import SessionStore
from chatdesk.storage.usage import UsageCounter, collect_user_stats
from chatdesk.ui.theme import CUSTOM_CSS

RECENT_COLUMNS = [
    {"name": "index", "label": "#", "field": "index", "align": "left"},
    {"name": "title", "label": "Chat Title", "field": "title", "align": "left"},
    {"name": "messages", "label": "Messages", "field": "messages", "align": "left"},
    {"name": "date", "label": "Date", "field": "date", "align": "left"},
]


def stat_card(label: str, value: int, color: str) -> None:
    with ui.column().classes("stat-card p-5 gap-1"):
        ui.label(label).classes("text-sm text-gray-500")
        ui.label(str(value)).classes(f"text-3xl font-bold {color}")


@ui.page("/dashboard")
def dashboard_page() -> None:
    """Dashboard page."""
    ui.add_head_html(CUSTOM_CSS)
    storage = get_storage()
    user_key = resolve_user_key(app.storage.user)
    total_searches = UsageCounter(storage).current()
    stats = collect_user_stats(SessionStore(storage), user_key)

    with ui.column().classes("w-full max-w-4xl mx-auto px-4 py-8 gap-8"):
        with ui.column().classes("gap-1"):
            with ui.row().classes("w-full items-center justify-between"):
                ui.label("Dashboard").classes("text-3xl font-bold text-gray-800")
                ui.link("Back to chat", "/").classes("text-sm")
            if user_key:
                ui.label(f"Welcome back, {user_key}").classes("text-gray-500")
            else:
                ui.label("Website activity overview").classes("text-gray-500")

        ui.label("🌐 Global Activity").classes("text-lg font-semibold text-gray-700")
        with ui.grid(columns=2).classes("w-full gap-4"):
            with ui.column().classes("stat-hero p-6 gap-1"):
                ui.label("Total Searches (All Users)").classes("text-sm opacity-80")
                ui.label(str(total_searches)).classes("text-4xl font-bold")
            with ui.column().classes("stat-hero p-6 gap-1"):
                ui.label("Status").classes("text-sm opacity-80")
                ui.label("🟢 Logged In" if user_key else "🔵 Guest Mode").classes(
                    "text-2xl font-bold"
                )

        if stats is None:
            with ui.column().classes("stat-card w-full p-8 items-center"):
                ui.label("🔒 Log in to see your personal chat history and detailed stats").classes(
                    "text-gray-500 text-lg"
                )
            return

        ui.label("👤 Your Activity").classes("text-lg font-semibold text-gray-700")
        with ui.grid(columns=4).classes("w-full gap-4"):
            stat_card("Your Chats", stats.total_chats, "text-indigo-600")
            stat_card("Total Messages", stats.total_messages, "text-purple-600")
            stat_card("Questions Asked", stats.questions_asked, "text-green-600")
            stat_card("AI Responses", stats.assistant_responses, "text-orange-500")

        with ui.column().classes("stat-card w-full p-0 gap-0"):
            ui.label("Your Recent Chats").classes("text-lg font-semibold text-gray-800 px-6 py-4")
            if not stats.recent_chats:
                with ui.column().classes("w-full items-center py-12"):
                    ui.label("No chats yet").classes("text-lg text-gray-400")
                    ui.label("Start a conversation from the chat page").classes(
                        "text-sm text-gray-400"
                    )
                return

            rows = [
                {
                    "index": number,
                    "title": chat.title or "Untitled",
                    "messages": len(chat.messages),
                    "date": chat.created_at.astimezone().strftime("%d %b %Y, %I:%M %p"),
                }
                for number, chat in enumerate(stats.recent_chats, start=1)
            ]
            ui.table(columns=RECENT_COLUMNS, rows=rows, row_key="index").props("flat").classes(
                "w-full"
            )
