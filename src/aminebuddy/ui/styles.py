"""CSS styles for the copilot widget.

Hides layout and styling decisions from the application logic.
"""

APP_CSS = """
Screen {
    background: $background;
}

/* ============================================
   Portfolio backdrop
   ============================================ */
#backdrop {
    width: 100%;
    height: 1fr;
    content-align: center middle;
    color: $text-muted;
}

/* ============================================
   Launcher button
   ============================================ */
#launcher {
    dock: bottom;
    width: auto;
    min-width: 20;
    margin: 0 2 1 0;
    background: $primary;
    color: $background;
    text-style: bold;
    border: tall $primary;

    &:hover {
        background: $primary-lighten-1;
    }

    &.-open {
        background: $surface;
        color: $foreground;
    }
}

/* ============================================
   Chat panel
   ============================================ */
#chat-panel {
    dock: right;
    width: 64;
    height: 100%;
    display: none;
    background: $panel;
    border: round $primary 60%;
    border-title-color: $primary;
    border-title-style: bold;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;

    &.-open {
        display: block;
    }

    &.-mobile {
        width: 100%;
    }

    &:focus-within {
        border: round $primary;
    }
}

#panel-header {
    height: 1;
    padding: 0 1;
}

#panel-title {
    width: 1fr;
    color: $primary;
    text-style: bold;
}

#close-btn {
    width: 5;
    min-width: 5;
    height: 1;
    border: none;
    background: transparent;
    color: $text-muted;

    &:hover {
        color: $error;
    }
}

#chat-log {
    height: 1fr;
    padding: 0 1;
    scrollbar-gutter: stable;
}

/* ============================================
   Messages
   ============================================ */
MessageBubble {
    width: 100%;
    height: auto;
    margin: 0 0 1 0;
    padding: 0 1;
}

.user-message {
    border-left: tall $success;
    background: $success 8%;

    & .message-header {
        color: $success;
        text-style: bold;
    }
}

.assistant-message {
    border-left: tall $primary;
    background: $primary 8%;

    & .message-header {
        color: $primary;
        text-style: bold;
    }
}

.message-header {
    height: auto;
}

.message-content {
    height: auto;
}

/* ============================================
   Page links and quick questions
   ============================================ */
PageLinks {
    height: auto;
    margin-top: 1;

    & Button {
        width: 100%;
        height: 1;
        border: none;
        background: $accent 15%;
        color: $accent;
        margin-bottom: 1;

        &:hover {
            background: $accent 30%;
        }
    }
}

QuickQuestions {
    height: auto;
    padding: 0 1;

    & Button {
        width: 100%;
        height: 1;
        border: none;
        background: $surface;
        color: $foreground;
        margin-bottom: 1;

        &:hover {
            background: $primary 25%;
        }
    }
}

#typing {
    height: 1;
    padding: 0 2;
    color: $text-muted;
    text-style: italic;
}

/* ============================================
   Input bar
   ============================================ */
ChatInputBar {
    height: 3;
    padding: 0 1;
}

#chat-input {
    width: 1fr;
}

#send-btn {
    width: 10;
    min-width: 8;
    background: $success;
    color: $background;
    text-style: bold;
}
"""
