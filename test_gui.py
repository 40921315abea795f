#!/usr/bin/env python3
"""
Smoke tests for the PyQt5 pages, driven through their widgets on the offscreen platform.
Run: python test_gui.py
"""
import os
import sys

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt5.QtWidgets import QApplication

from gui import MainWindow

app = QApplication.instance() or QApplication(sys.argv)


def _list_items(widget):
    return [widget.item(i).text() for i in range(widget.count())]


def test_navigation():
    window = MainWindow()
    assert window.stack.currentWidget() is window.welcome_page
    window.welcome_page.buttons[2].click()
    assert window.stack.currentWidget() is window.interactive_page
    window.show_welcome()
    window.welcome_page.buttons[1].click()
    assert window.stack.currentWidget() is window.root_page
    print("[PASS] welcome page opens each flow")


def test_batch_page():
    page = MainWindow().batch_page
    for name, text in (("n", "23"), ("g", "5"), ("private_a", "6"), ("private_b", "15")):
        page.inputs[name].setText(text)
    page.compute_button.click()
    assert page.state.secret_a == page.state.secret_b == 2
    assert "Alice Sends: 8" in page.results_label.text()
    assert page.steps_button.text() == "Show Detailed Steps"

    page.steps_button.click()
    assert len(_list_items(page.steps_list)) == 4

    page.inputs["g"].setText("2")
    page.compute_button.click()
    assert page.error_label.text() == "g must be a primitive root of n."
    assert len(_list_items(page.reason_list)) == 22
    assert _list_items(page.steps_list) == []
    print("[PASS] batch page")


def test_primitive_root_page():
    page = MainWindow().root_page
    page.inputs["n"].setText("7")
    page.inputs["g"].setText("3")
    page.calculate_button.click()
    assert page.verdict_label.text() == "3 is a primitive root of 7"
    assert _list_items(page.steps_list)[-1] == "3^6 mod 7 = 1"

    page.inputs["g"].setText("")
    page.calculate_button.click()
    assert page.error_label.text() == "Please fill in all fields."
    assert page.verdict_label.text() == ""
    print("[PASS] primitive-root page")


def test_interactive_page():
    page = MainWindow().interactive_page
    page.inputs["n"].setText("23")
    page.inputs["g"].setText("5")

    page.second_window.private_input.setText("15")
    page.second_window.compute_button.click()
    assert page.error_label.text() == "Please fill in all fields and ensure Alice has sent their public key."

    page.first_window.private_input.setText("6")
    page.first_window.compute_button.click()
    assert _list_items(page.first_window.message_list)[-1] == "Alice sends public key: 8"

    page.second_window.compute_button.click()
    page.secrets_button.click()
    assert page.state.first.secret == page.state.second.secret == 2
    assert "Alice's Secret Key: 2" in page.secrets_label.text()
    assert len(_list_items(page.secret_steps_list)) == 2

    page.inputs["n"].setText("29")
    assert _list_items(page.first_window.message_list) == []
    print("[PASS] interactive page")


if __name__ == "__main__":
    test_navigation()
    test_batch_page()
    test_primitive_root_page()
    test_interactive_page()
    print("\nAll tests passed!")
