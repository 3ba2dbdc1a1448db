import sys
import io
import traceback
from PyQt6.QtWidgets import (QApplication, QMainWindow, QSplitter, QFileDialog, QTextEdit,
                           QDockWidget, QMessageBox, QVBoxLayout, QHBoxLayout, QWidget,
                           QLabel, QComboBox, QToolBar, QTableWidget, QTableWidgetItem, QCheckBox)
from PyQt6.QtGui import QFont, QColor, QAction, QSyntaxHighlighter, QTextCharFormat
from PyQt6.QtCore import Qt, QRegularExpression

# Import simulator components
from simulator.asm import Opcode, Register, NUM_REGISTERS, to_binary32
from simulator.asm.formatters import TraceFormatter
from simulator.parser import Parser, ParserException
from simulator.asm import InstructionException
from simulator.cpu import Cpu, ExecutionException


class SimulatorHighlighter(QSyntaxHighlighter):
    """Syntax highlighter for simulator programs."""

    def __init__(self, parent=None):
        super().__init__(parent)

        self.highlighting_rules = []

        # Instructions
        instruction_format = QTextCharFormat()
        instruction_format.setForeground(QColor("#0000FF"))  # Blue
        instruction_format.setFontWeight(QFont.Weight.Bold)
        for opcode in Opcode:
            regex = QRegularExpression(r"\b" + opcode.mnemonic + r"\b",
                                       QRegularExpression.PatternOption.CaseInsensitiveOption)
            self.highlighting_rules.append((regex, instruction_format))

        # Registers
        register_format = QTextCharFormat()
        register_format.setForeground(QColor("#AA00AA"))  # Purple
        for reg in Register:
            regex = QRegularExpression(r"\b" + reg.name + r"\b",
                                       QRegularExpression.PatternOption.CaseInsensitiveOption)
            self.highlighting_rules.append((regex, register_format))

        # Immediates
        number_format = QTextCharFormat()
        number_format.setForeground(QColor("#009900"))  # Green
        self.highlighting_rules.append((QRegularExpression(r"(?<![\w])[+-]?\d+\b"), number_format))

        # Comments
        comment_format = QTextCharFormat()
        comment_format.setForeground(QColor("#808080"))  # Gray
        self.highlighting_rules.append((QRegularExpression(r";.*"), comment_format))

    def highlightBlock(self, text):
        """Apply syntax highlighting to the given block of text."""
        for pattern, format in self.highlighting_rules:
            match_iterator = pattern.globalMatch(text)
            while match_iterator.hasNext():
                match = match_iterator.next()
                self.setFormat(match.capturedStart(), match.capturedLength(), format)


class ProgramEditor(QTextEdit):
    """Text editor for simulator programs."""

    def __init__(self, parent=None):
        super().__init__(parent)
        font = QFont("Consolas", 11)
        self.setFont(font)
        metrics = self.fontMetrics()
        self.setTabStopDistance(4 * metrics.horizontalAdvance(' '))

        self.current_file = None
        self.modified = False
        self.highlighter = SimulatorHighlighter(self.document())
        self.textChanged.connect(self.on_text_changed)

    def on_text_changed(self):
        self.modified = True

    def new_file(self):
        self.clear()
        self.current_file = None
        self.modified = False

    def open_file(self, filename=None):
        """Open a file in the editor."""
        if not filename:
            filename, _ = QFileDialog.getOpenFileName(
                self, "Open File", "", "Assembly Files (*.asm);;All Files (*)"
            )
        if filename:
            try:
                with open(filename, 'r', encoding='utf-8') as f:
                    text = f.read()
                self.setText(text)
                self.current_file = filename
                self.modified = False
                return True
            except OSError as e:
                QMessageBox.critical(self, "Error Opening File", str(e))
        return False

    def save_file(self, filename=None):
        """Save the current file."""
        if not filename and not self.current_file:
            return self.save_file_as()

        filename = filename or self.current_file
        try:
            with open(filename, 'w', encoding='utf-8') as f:
                f.write(self.toPlainText())
            self.current_file = filename
            self.modified = False
            return True
        except OSError as e:
            QMessageBox.critical(self, "Error Saving File", str(e))
            return False

    def save_file_as(self):
        filename, _ = QFileDialog.getSaveFileName(
            self, "Save File As", "", "Assembly Files (*.asm);;All Files (*)"
        )
        if filename:
            return self.save_file(filename)
        return False


class OutputConsole(QTextEdit):
    """Console widget for displaying the execution trace and errors."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setReadOnly(True)
        self.setFont(QFont("Consolas", 10))
        self.setStyleSheet("background-color: #F0F0F0;")

    def append_message(self, text, color="black"):
        """Append a colored message to the console."""
        self.setTextColor(QColor(color))
        self.append(text)

    def clear_console(self):
        self.clear()


class RegisterView(QWidget):
    """Shows the register file and the timing statistics of the last run."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.layout = QVBoxLayout(self)

        self.table = QTableWidget(NUM_REGISTERS, 2)
        self.table.setHorizontalHeaderLabels(["Decimal", "Binary"])
        self.table.setVerticalHeaderLabels([reg.name for reg in Register])
        self.table.setFont(QFont("Consolas", 10))
        self.table.setEditTriggers(QTableWidget.EditTrigger.NoEditTriggers)
        self.layout.addWidget(self.table)

        self.stats = QLabel()
        self.layout.addWidget(self.stats)

        self.update_state(Cpu())

    def update_state(self, cpu: Cpu):
        for i, value in enumerate(cpu.registers):
            self.table.setItem(i, 0, QTableWidgetItem(str(value)))
            self.table.setItem(i, 1, QTableWidgetItem(to_binary32(value)))
        self.table.resizeColumnsToContents()

        cpi = cpu.cpi
        cpi_str = f"{cpi}" if cpi is not None else "-"
        self.stats.setText(f"Cycles: {cpu.cycle_count}   Instructions: {cpu.instruction_count}   CPI: {cpi_str}")


class InstructionReferenceWidget(QWidget):
    """Widget for displaying the instruction set reference."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.layout = QVBoxLayout(self)

        search_layout = QHBoxLayout()
        self.search_input = QComboBox()
        self.search_input.addItems([op.name for op in Opcode])
        self.search_input.currentTextChanged.connect(self.update_instruction_details)
        search_layout.addWidget(QLabel("Instruction:"))
        search_layout.addWidget(self.search_input)
        self.layout.addLayout(search_layout)

        self.details = QTextEdit()
        self.details.setReadOnly(True)
        self.details.setFont(QFont("Consolas", 10))
        self.layout.addWidget(self.details)

        self.update_instruction_details(self.search_input.currentText())

    def update_instruction_details(self, instruction):
        """Update the details for the selected instruction."""
        opcode = Opcode.parse_str(instruction)
        if opcode is None:
            self.details.setHtml("<p>No details available.</p>")
            return

        html = f"<h2>{opcode.name}</h2>"
        html += f"<p><b>Opcode:</b> 0x{opcode.value:x}</p>"
        html += f"<p><b>Cycles:</b> {opcode.cycles}</p>"
        html += f"<p><b>Description:</b> {opcode.description}</p>"
        args = str(opcode.arguments)
        html += f"<p><b>Format:</b> {opcode.mnemonic} {args}</p>"
        self.details.setHtml(html)


class SimulatorGUI(QMainWindow):
    """Main window for the simulator application."""

    def __init__(self):
        super().__init__()

        self.setWindowTitle("CPU Simulator")
        self.setMinimumSize(1200, 800)

        self.editor = ProgramEditor(self)
        self.console = OutputConsole(self)
        self.register_view = RegisterView(self)
        self.instruction_ref = InstructionReferenceWidget(self)

        self.main_splitter = QSplitter(Qt.Orientation.Vertical)
        self.main_splitter.addWidget(self.editor)
        self.main_splitter.addWidget(self.console)
        self.main_splitter.setSizes([500, 300])
        self.setCentralWidget(self.main_splitter)

        self.reg_dock = QDockWidget("Registers", self)
        self.reg_dock.setWidget(self.register_view)
        self.addDockWidget(Qt.DockWidgetArea.RightDockWidgetArea, self.reg_dock)

        self.ref_dock = QDockWidget("Instruction Reference", self)
        self.ref_dock.setWidget(self.instruction_ref)
        self.addDockWidget(Qt.DockWidgetArea.RightDockWidgetArea, self.ref_dock)

        self.create_menus()
        self.create_toolbar()

        self.statusBar().showMessage("Ready")

    def create_menus(self):
        """Create the application menus."""
        file_menu = self.menuBar().addMenu("&File")

        new_action = QAction("&New", self)
        new_action.setShortcut("Ctrl+N")
        new_action.triggered.connect(self.new_file)
        file_menu.addAction(new_action)

        open_action = QAction("&Open...", self)
        open_action.setShortcut("Ctrl+O")
        open_action.triggered.connect(self.open_file)
        file_menu.addAction(open_action)

        save_action = QAction("&Save", self)
        save_action.setShortcut("Ctrl+S")
        save_action.triggered.connect(self.save_file)
        file_menu.addAction(save_action)

        file_menu.addSeparator()

        exit_action = QAction("E&xit", self)
        exit_action.setShortcut("Alt+F4")
        exit_action.triggered.connect(self.close)
        file_menu.addAction(exit_action)

        run_menu = self.menuBar().addMenu("&Run")

        run_action = QAction("&Run", self)
        run_action.setShortcut("F5")
        run_action.triggered.connect(self.run_program)
        run_menu.addAction(run_action)

        view_menu = self.menuBar().addMenu("&View")

        toggle_ref_action = QAction("Instruction &Reference", self)
        toggle_ref_action.setCheckable(True)
        toggle_ref_action.setChecked(True)
        toggle_ref_action.triggered.connect(self.toggle_reference)
        view_menu.addAction(toggle_ref_action)

    def create_toolbar(self):
        """Create the application toolbar."""
        toolbar = QToolBar("Main Toolbar")
        toolbar.setMovable(False)
        self.addToolBar(toolbar)

        open_action = QAction("Open", self)
        open_action.triggered.connect(self.open_file)
        toolbar.addAction(open_action)

        save_action = QAction("Save", self)
        save_action.triggered.connect(self.save_file)
        toolbar.addAction(save_action)

        toolbar.addSeparator()

        run_action = QAction("Run", self)
        run_action.triggered.connect(self.run_program)
        toolbar.addAction(run_action)

        self.trace_cb = QCheckBox("Trace")
        self.trace_cb.setChecked(True)
        toolbar.addWidget(self.trace_cb)

    def new_file(self):
        if self.maybe_save():
            self.editor.new_file()
            self.statusBar().showMessage("New file created")

    def open_file(self):
        if self.maybe_save():
            if self.editor.open_file():
                self.statusBar().showMessage(f"Opened {self.editor.current_file}")

    def save_file(self):
        if self.editor.save_file():
            self.statusBar().showMessage(f"Saved {self.editor.current_file}")
            return True
        return False

    def maybe_save(self):
        """Check if the current file needs to be saved before proceeding."""
        if not self.editor.modified:
            return True

        reply = QMessageBox.question(
            self, "Save Changes",
            "The program has been modified. Save changes?",
            QMessageBox.StandardButton.Save | QMessageBox.StandardButton.Discard | QMessageBox.StandardButton.Cancel
        )

        if reply == QMessageBox.StandardButton.Save:
            return self.editor.save_file()
        elif reply == QMessageBox.StandardButton.Cancel:
            return False

        return True

    def toggle_reference(self, checked):
        if checked:
            self.ref_dock.show()
        else:
            self.ref_dock.hide()

    def run_program(self):
        """Execute the program in the editor."""
        self.console.clear_console()
        cpu = Cpu()
        trace = io.StringIO()
        try:
            instructions = Parser(self.editor.toPlainText()).parse_program()
            cpu.run(instructions, TraceFormatter(trace) if self.trace_cb.isChecked() else None)
            self.console.append_message(trace.getvalue().strip(), "black")
            self.console.append_message("Execution complete.", "green")
            self.statusBar().showMessage(f"Executed {cpu.instruction_count} instructions")

        except (ParserException, InstructionException, ExecutionException) as e:
            self.console.append_message(trace.getvalue().strip(), "black")
            self.console.append_message(f"Error: {str(e)}", "red")

            line_number = getattr(e, 'line_number', 0)
            if line_number > 0:
                cursor = self.editor.textCursor()
                doc = self.editor.document()
                cursor.setPosition(doc.findBlockByLineNumber(line_number - 1).position())
                self.editor.setTextCursor(cursor)

        except Exception as e:
            self.console.append_message(f"Unexpected error: {str(e)}", "red")
            self.console.append_message(traceback.format_exc(), "red")

        self.register_view.update_state(cpu)


def main():
    """Main application entry point."""
    app = QApplication(sys.argv)
    window = SimulatorGUI()
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
