"""Shared page styling."""

CUSTOM_CSS = """
<link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600&display=swap"
      rel="stylesheet">
<style>
    * { font-family: 'Inter', sans-serif; }

    body { background: #f5f5f5; min-height: 100vh; }

    .app-container {
        background: white;
        border-radius: 12px;
        box-shadow: 0 2px 8px rgba(0, 0, 0, 0.1);
        overflow: hidden;
    }

    .header { background: #1f2937; }

    .message-user {
        background: #1f2937;
        color: white;
        border-radius: 18px 18px 4px 18px;
    }

    .message-assistant {
        background: #f3f4f6;
        color: #1f2937;
        border-radius: 18px 18px 18px 4px;
    }

    .avatar-user { background: #1f2937; }
    .avatar-assistant { background: #6b7280; }

    .typing-dot {
        width: 8px; height: 8px;
        background: #6b7280;
        border-radius: 50%;
        animation: bounce 1.4s infinite ease-in-out;
    }
    .typing-dot:nth-child(2) { animation-delay: 0.2s; }
    .typing-dot:nth-child(3) { animation-delay: 0.4s; }

    @keyframes bounce {
        0%, 60%, 100% { transform: translateY(0); }
        30% { transform: translateY(-6px); }
    }

    .input-box {
        background: #f9fafb;
        border: 1px solid #e5e7eb;
        border-radius: 12px;
        transition: border-color 0.2s;
    }
    .input-box:focus-within { border-color: #6b7280; }

    .send-btn { background: #1f2937 !important; color: white !important; }

    .chip { background: #f3f4f6; border-radius: 9999px; }

    .mode-btn { border: 1px solid #e5e7eb; border-radius: 9999px; color: #374151; }
    .mode-active { background: #eef2ff; border-color: #c7d2fe; color: #4338ca; }

    .mic-listening { color: #dc2626 !important; animation: pulse 1s infinite; }
    @keyframes pulse { 50% { opacity: 0.5; } }

    .history-item { border-radius: 8px; padding: 6px 10px; color: #374151; }
    .history-item:hover { background: #f3f4f6; }
    .history-active { background: #e5e7eb; color: #111827; }

    .stat-card {
        background: white;
        border: 1px solid #f3f4f6;
        border-radius: 16px;
        box-shadow: 0 1px 2px rgba(0, 0, 0, 0.05);
    }
    .stat-hero {
        background: linear-gradient(135deg, #6366f1 0%, #9333ea 100%);
        color: white;
        border-radius: 16px;
    }
</style>
"""
