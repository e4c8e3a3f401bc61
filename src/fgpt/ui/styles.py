"""CSS styles for the TUI.

Hides layout and styling decisions from the application logic.
Layout: chat on the left, progress/form preview on the right, prompt bar and
trace log at the bottom.
"""

APP_CSS = """
Screen {
    layout: grid;
    grid-size: 2 2;
    grid-columns: 3fr 2fr;
    grid-rows: 1fr auto;
    background: $background;
}

/* Chat history */
#chat-history {
    height: 100%;
    background: $panel;
    border: round $primary 60%;
    border-title-color: $primary;
    border-title-style: bold;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
    padding: 0 1;
    scrollbar-gutter: stable;

    &:focus-within {
        border: round $primary;
    }
}

.welcome {
    height: auto;
    padding: 1 2;
    align-horizontal: center;
}

.welcome-title {
    text-style: bold;
    color: $secondary;
    content-align: center middle;
    width: 100%;
}

.welcome-text {
    color: $text-muted;
    margin: 1 0;
    width: 100%;
}

.welcome-subtitle {
    text-style: bold;
    color: $accent;
    margin-bottom: 1;
}

.sample-prompt {
    padding: 0 1;
    margin-bottom: 1;
    border: round $border;

    &:hover {
        border: round $primary;
        background: $primary 15%;
    }
}

.chat-message {
    height: auto;
    margin: 1 0 0 0;
    padding: 0 1;
}

.user-message {
    border-left: thick $primary;
    background: $primary 10%;

    & .message-header {
        color: $primary;
    }
}

.assistant-message {
    border-left: thick $secondary;
    background: $surface;

    & .message-header {
        color: $secondary;
    }
}

.message-header {
    text-style: bold;
}

.message-content {
    color: $foreground;
}

/* Right panel: progress and form preview */
#right-panel {
    height: 100%;
}

#progress-panel {
    height: auto;
    border: round $accent 60%;
    border-title-color: $accent;
    padding: 1 2;
}

#form-preview {
    height: 1fr;
    border: round $success 60%;
    border-title-color: $success;
    border-subtitle-color: $text-muted;
    padding: 0 1;
}

.form-question {
    height: auto;
    margin: 1 0 0 0;
    padding: 0 1;
    border-left: thick $success 50%;
}

/* Bottom bar */
#bottom-bar {
    column-span: 2;
    height: auto;
}

#prompt-bar {
    height: auto;
    padding: 0 1;
}

#prompt-input {
    width: 1fr;
}

#send-btn {
    min-width: 10;
}

#debug-panel {
    height: 10;
    border: round $warning 50%;
    border-title-color: $warning;
    border-subtitle-color: $text-muted;
}
"""
