import sys
from typing import Callable, Optional

from PyQt5.QtWidgets import (
    QApplication, QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QPushButton,
    QLineEdit, QLabel, QListWidget, QStackedWidget, QFormLayout
)

from config import WINDOW_TITLE, WINDOW_GEOMETRY, ACCENT_COLOR, ERROR_COLOR
from flows import (
    BatchExchangeState, PrimitiveRootState, InteractiveExchangeState, PartyState,
    set_batch_field, compute_keys, toggle_steps, detailed_steps, reason_lines,
    set_root_field, check_primitive_root, verdict, root_steps,
    set_parameter, set_private, publish_first, publish_second, compute_secrets,
)
from logging_util import setup_logger
from utils import parse_number, format_optional

logger = setup_logger("gui")

STYLE_SHEET = f"""
    QMainWindow, QWidget {{
        background-color: #1e1e1e;
        color: #ffffff;
    }}
    QLineEdit, QListWidget {{
        background-color: #2e2e2e;
        color: #ffffff;
        border: 1px solid #555;
        padding: 5px;
    }}
    QLabel {{
        font-size: 14px;
        color: #f8f8f2;
    }}
    QLabel#title {{
        font-size: 22px;
        font-weight: bold;
    }}
    QLabel#error {{
        color: {ERROR_COLOR};
        font-weight: bold;
    }}
    QPushButton {{
        background-color: #1e1e1e;
        color: white;
        padding: 8px;
        border-radius: 5px;
        font-weight: bold;
        border: 2px solid {ACCENT_COLOR};
    }}
"""


def _title(text: str) -> QLabel:
    label = QLabel(text)
    label.setObjectName("title")
    return label


def _error_label() -> QLabel:
    label = QLabel()
    label.setObjectName("error")
    label.setWordWrap(True)
    label.hide()
    return label


def _show_error(label: QLabel, message: Optional[str]):
    label.setText(message or "")
    label.setVisible(bool(message))


def _fill_list(widget: QListWidget, lines):
    widget.clear()
    widget.addItems(list(lines))
    widget.setVisible(bool(lines))


def _number_input(on_change: Callable[[Optional[int]], None]) -> QLineEdit:
    edit = QLineEdit()
    edit.textChanged.connect(lambda text: on_change(parse_number(text)))
    return edit


class ChatWindow(QWidget):
    """One party's panel: private key input, published keys and its message log."""

    def __init__(self, name: str, on_private_key_change=None, on_compute_public_key=None):
        super().__init__()
        layout = QVBoxLayout()
        layout.addWidget(_title(name))

        self.private_input = None
        self.compute_button = None
        if on_private_key_change is not None:
            layout.addWidget(QLabel(f"{name}'s Private Key:"))
            self.private_input = _number_input(on_private_key_change)
            layout.addWidget(self.private_input)
            self.compute_button = QPushButton("Compute Public Key")
            self.compute_button.clicked.connect(on_compute_public_key)
            layout.addWidget(self.compute_button)

        self.public_label = QLabel()
        self.secret_label = QLabel()
        self.message_list = QListWidget()
        layout.addWidget(self.public_label)
        layout.addWidget(self.secret_label)
        layout.addWidget(self.message_list)
        self.setLayout(layout)

    def refresh(self, party: PartyState):
        self.public_label.setText(f"Public Key: {format_optional(party.public)}")
        self.public_label.setVisible(party.public is not None)
        self.secret_label.setText(f"Secret Key: {format_optional(party.secret)}")
        self.secret_label.setVisible(party.secret is not None)
        _fill_list(self.message_list, party.messages)


class FlowPage(QWidget):
    """Base page: keeps the flow state and re-renders after every transition."""

    def __init__(self, title: str, state, on_back):
        super().__init__()
        self.state = state
        self.page_layout = QVBoxLayout()
        self.page_layout.addWidget(_title(title))
        self.form = QFormLayout()
        self.page_layout.addLayout(self.form)
        self.error_label = _error_label()
        self.inputs = {}
        self._on_back = on_back

    def add_number_row(self, label: str, name: str, setter):
        edit = _number_input(lambda v: self.dispatch(setter, name, v))
        self.inputs[name] = edit
        self.form.addRow(label, edit)

    def dispatch(self, transition, *args):
        self.state = transition(self.state, *args)
        self.refresh()

    def finish_layout(self):
        back_button = QPushButton("Back to Welcome Page")
        back_button.clicked.connect(self._on_back)
        self.page_layout.addStretch()
        self.page_layout.addWidget(back_button)
        self.setLayout(self.page_layout)
        self.refresh()

    def refresh(self):
        raise NotImplementedError


class BatchExchangePage(FlowPage):
    def __init__(self, on_back):
        super().__init__("Diffie-Hellman Key Exchange", BatchExchangeState(), on_back)
        s = self.state
        self.add_number_row("Enter n (must be a prime number):", "n", set_batch_field)
        self.add_number_row("Enter g (must be a prime number and a primitive root of n):", "g", set_batch_field)
        self.add_number_row(f"Enter {s.name_a}'s private key:", "private_a", set_batch_field)
        self.add_number_row(f"Enter {s.name_b}'s private key:", "private_b", set_batch_field)

        self.compute_button = QPushButton("Compute Keys")
        self.compute_button.clicked.connect(lambda: self.dispatch(compute_keys))
        self.page_layout.addWidget(self.compute_button)
        self.page_layout.addWidget(self.error_label)

        self.reason_title = QLabel("Calculations:")
        self.reason_title.setObjectName("error")
        self.reason_list = QListWidget()
        self.page_layout.addWidget(self.reason_title)
        self.page_layout.addWidget(self.reason_list)

        self.results_label = QLabel()
        self.steps_button = QPushButton()
        self.steps_button.clicked.connect(lambda: self.dispatch(toggle_steps))
        self.steps_list = QListWidget()
        self.page_layout.addWidget(self.results_label)
        self.page_layout.addWidget(self.steps_button)
        self.page_layout.addWidget(self.steps_list)
        self.finish_layout()

    def refresh(self):
        s = self.state
        _show_error(self.error_label, s.error)
        reasons = reason_lines(s)
        self.reason_title.setVisible(bool(reasons))
        _fill_list(self.reason_list, reasons)

        self.results_label.setVisible(s.has_results)
        self.steps_button.setVisible(s.has_results)
        if s.has_results:
            self.results_label.setText(
                f"{s.name_a} Sends: {s.public_a}\n{s.name_b} Sends: {s.public_b}\n"
                f"{s.name_a}'s Secret Key: {s.secret_a}\n{s.name_b}'s Secret Key: {s.secret_b}")
            self.steps_button.setText("Hide Detailed Steps" if s.show_steps else "Show Detailed Steps")
        _fill_list(self.steps_list, detailed_steps(s) if s.show_steps else [])


class PrimitiveRootPage(FlowPage):
    def __init__(self, on_back):
        super().__init__("Primitive Root Calculator", PrimitiveRootState(), on_back)
        self.add_number_row("Enter n:", "n", set_root_field)
        self.add_number_row("Enter g:", "g", set_root_field)

        self.calculate_button = QPushButton("Calculate Primitive Root")
        self.calculate_button.clicked.connect(lambda: self.dispatch(check_primitive_root))
        self.page_layout.addWidget(self.calculate_button)
        self.page_layout.addWidget(self.error_label)

        self.verdict_label = _title("")
        self.steps_list = QListWidget()
        self.page_layout.addWidget(self.verdict_label)
        self.page_layout.addWidget(self.steps_list)
        self.finish_layout()

    def refresh(self):
        _show_error(self.error_label, self.state.error)
        text = verdict(self.state)
        self.verdict_label.setText(text)
        self.verdict_label.setVisible(bool(text))
        _fill_list(self.steps_list, root_steps(self.state))


class InteractiveExchangePage(FlowPage):
    def __init__(self, on_back):
        super().__init__("Interactive Key Exchange", InteractiveExchangeState(), on_back)
        self.add_number_row("Enter n (must be a prime number):", "n", set_parameter)
        self.add_number_row("Enter g (must be a prime number and a primitive root of n):", "g", set_parameter)
        self.page_layout.addWidget(self.error_label)

        self.first_window = ChatWindow(
            self.state.first.name,
            on_private_key_change=lambda v: self.dispatch(set_private, "first", v),
            on_compute_public_key=lambda: self.dispatch(publish_first),
        )
        self.second_window = ChatWindow(
            self.state.second.name,
            on_private_key_change=lambda v: self.dispatch(set_private, "second", v),
            on_compute_public_key=lambda: self.dispatch(publish_second),
        )
        windows = QHBoxLayout()
        windows.addWidget(self.first_window)
        windows.addWidget(self.second_window)
        self.page_layout.addLayout(windows)

        self.secrets_button = QPushButton("Calculate Secret Keys")
        self.secrets_button.clicked.connect(lambda: self.dispatch(compute_secrets))
        self.page_layout.addWidget(self.secrets_button)

        self.secret_steps_list = QListWidget()
        self.secrets_label = QLabel()
        self.page_layout.addWidget(self.secret_steps_list)
        self.page_layout.addWidget(self.secrets_label)
        self.finish_layout()

    def refresh(self):
        s = self.state
        _show_error(self.error_label, s.error)
        self.first_window.refresh(s.first)
        self.second_window.refresh(s.second)
        _fill_list(self.secret_steps_list, s.secret_steps)
        self.secrets_label.setText(
            f"Secret Keys:\n{s.first.name}'s Secret Key: {format_optional(s.first.secret)}\n"
            f"{s.second.name}'s Secret Key: {format_optional(s.second.secret)}")


class WelcomePage(QWidget):
    def __init__(self, pages):
        super().__init__()
        layout = QVBoxLayout()
        layout.addWidget(_title("Welcome"))
        self.buttons = []
        for label, open_page in pages:
            button = QPushButton(label)
            button.clicked.connect(open_page)
            layout.addWidget(button)
            self.buttons.append(button)
        layout.addStretch()
        self.setLayout(layout)


class MainWindow(QMainWindow):
    """Welcome page plus one page per flow, switched in a stacked widget."""

    def __init__(self):
        super().__init__()
        self.setWindowTitle(WINDOW_TITLE)
        self.setGeometry(*WINDOW_GEOMETRY)

        self.stack = QStackedWidget()
        self.batch_page = BatchExchangePage(self.show_welcome)
        self.root_page = PrimitiveRootPage(self.show_welcome)
        self.interactive_page = InteractiveExchangePage(self.show_welcome)
        self.welcome_page = WelcomePage([
            ("Diffie-Hellman Key Exchange", lambda: self._open(self.batch_page)),
            ("Calculate Primitive Root", lambda: self._open(self.root_page)),
            ("Interactive Key Exchange", lambda: self._open(self.interactive_page)),
        ])
        for page in (self.welcome_page, self.batch_page, self.root_page, self.interactive_page):
            self.stack.addWidget(page)

        self.setCentralWidget(self.stack)
        self.setStyleSheet(STYLE_SHEET)

    def _open(self, page):
        logger.debug(f"Opening {type(page).__name__}")
        self.stack.setCurrentWidget(page)

    def show_welcome(self):
        self.stack.setCurrentWidget(self.welcome_page)


def main():
    app = QApplication(sys.argv)
    window = MainWindow()
    window.show()
    return app.exec_()


if __name__ == '__main__':
    sys.exit(main())
