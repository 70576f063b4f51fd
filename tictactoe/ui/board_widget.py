from PySide6.QtWidgets import QWidget, QSizePolicy
from PySide6.QtCore import Qt, QSize, Signal, QPointF
from PySide6.QtGui import QPainter, QColor, QPen

from ..board import BOARD_SIZE, Mark

X_COLOR = "#8acaff"
O_COLOR = "#ff8a8a"
GRID_COLOR = "#555"
BACKGROUND_COLOR = "#333"
HIGHLIGHT_COLOR = "#4a5a3a"


class BoardWidget(QWidget):
    """
    custom widget to draw and click on tic-tac-toe board
    """
    cell_clicked = Signal(int, int)  # emits row, col on click

    def __init__(self, controller, parent=None):
        super().__init__(parent)
        self.controller = controller    # owns the board we draw
        self.setSizePolicy(QSizePolicy.Ignored, QSizePolicy.Ignored)
        self.setMinimumSize(QSize(150, 150))
        controller.board_changed.connect(self.update)

    def heightForWidth(self, width):
        # keep square shape
        return width

    def hasHeightForWidth(self):
        return True

    def _geometry(self):
        # square grid centred in the widget
        w, h = self.width(), self.height()
        side = min(w, h)
        return (w - side) / 2, (h - side) / 2, side

    def paintEvent(self, event):
        """
        draw grid, X/O marks, and highlight the winning line
        """
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing, True)
        ox, oy, side = self._geometry()
        cell_size = side / BOARD_SIZE
        board = self.controller.board
        painter.fillRect(self.rect(), QColor(BACKGROUND_COLOR))
        # winning cells
        for r, c in board.winning_line() or ():
            painter.fillRect(int(ox + c*cell_size), int(oy + r*cell_size),
                             int(cell_size), int(cell_size), QColor(HIGHLIGHT_COLOR))
        # grid lines
        painter.setPen(QPen(QColor(GRID_COLOR), 2))
        for i in range(1, BOARD_SIZE):
            x = ox + i*cell_size
            painter.drawLine(int(x), int(oy), int(x), int(oy + side))
            y = oy + i*cell_size
            painter.drawLine(int(ox), int(y), int(ox + side), int(y))
        # marks
        for r in range(BOARD_SIZE):
            for c in range(BOARD_SIZE):
                mark = board.get(r, c)
                if mark is Mark.EMPTY: continue
                cx = ox + c*cell_size + cell_size/2
                cy = oy + r*cell_size + cell_size/2
                rad = cell_size/2 * 0.7
                if mark is Mark.X:
                    painter.setPen(QPen(QColor(X_COLOR), 4))
                    # two crossing lines
                    painter.drawLine(QPointF(cx-rad, cy-rad), QPointF(cx+rad, cy+rad))
                    painter.drawLine(QPointF(cx+rad, cy-rad), QPointF(cx-rad, cy+rad))
                else:
                    painter.setPen(QPen(QColor(O_COLOR), 4))
                    painter.drawEllipse(QPointF(cx, cy), rad, rad)
        painter.end()

    def cell_at(self, x, y):
        """
        map widget coords to (row, col), None outside the grid
        """
        ox, oy, side = self._geometry()
        if side <= 0 or not (ox <= x < ox+side and oy <= y < oy+side):
            return None
        cell = side / BOARD_SIZE
        col = int((x-ox) // cell); row = int((y-oy) // cell)
        # clamp to valid range
        row = max(0, min(row, BOARD_SIZE-1)); col = max(0, min(col, BOARD_SIZE-1))
        return row, col

    def clickable_cell(self, x, y):
        """
        cell under (x, y) if a human may play there now, else None
        """
        if not self.controller.accepts_input():
            return None
        pos = self.cell_at(x, y)
        # filled cells are disabled
        if pos is None or not self.controller.board.is_empty(*pos):
            return None
        return pos

    def mouseReleaseEvent(self, event):
        """
        handle clicks: map coords to board cell and emit
        """
        if event.button() != Qt.LeftButton:
            return
        pos = self.clickable_cell(event.position().x(), event.position().y())
        if pos is None:
            return
        self.cell_clicked.emit(*pos)  # notify main window
