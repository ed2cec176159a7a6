# --- Grid Structure ---
DEFAULT_GRID_SIZE = 10  # Cells per side of a square grid
MIN_GRID_SIZE = 1

# --- Maze Generation ---
DEFAULT_ALGORITHM = "wilsons"
DEFAULT_SEED = None  # None = fresh OS entropy on every run

# --- Cell Directions ---
DIR_N = "N"
DIR_E = "E"
DIR_S = "S"
DIR_W = "W"

# --- Corners ---
CORNER_NW = "NW"
CORNER_NE = "NE"
CORNER_SE = "SE"
CORNER_SW = "SW"

# --- Layout ---
DEFAULT_CELL_SIZE = 1.0  # Side length of a cell in layout units

# --- 3D Printable Mesh ---
DEFAULT_WALL_THICKNESS_3D = 0.2
DEFAULT_WALL_HEIGHT_3D = 1.0
DEFAULT_BASE_HEIGHT_3D = 0.4
GEOMETRY_TOLERANCE = 1e-9  # For floating point comparisons

# --- Output ---
DEFAULT_OUTPUT_DIR = "output"
VIS_DPI = 150

# --- Visualization ---
VIS_FIGURE_SIZE = (8, 8)
VIS_WALL_COLOR = "black"
VIS_WALL_LW = 2.0
VIS_LINK_LINE_STYLE = "g-"
VIS_LINK_LINE_LW = 1.0
VIS_LINK_LINE_ALPHA = 0.7
VIS_CELL_OUTLINE_COLOR = "lightgrey"
VIS_CELL_OUTLINE_LW = 0.5
VIS_CONN_UNREACHABLE_COLOR = "lightgrey"
VIS_DIST_COLORMAP = "viridis"
VIS_LABEL_FONT_SIZE = 7
VIS_LABEL_MAX_GRID_SIZE = 16  # Skip per-cell labels on larger grids
VIS_SOLUTION_LINE_STYLE = "r-"
VIS_SOLUTION_LINE_LW = 2.0
VIS_SOLUTION_LINE_ALPHA = 0.9
VIS_ARROW_COLOR = "darkred"
VIS_ARROW_SCALE = 0.35  # Arrow length as a fraction of a cell
VIS_ENTRY_MARKER = "go"
VIS_EXIT_MARKER = "ro"
VIS_SOLUTION_ENTRY_MARKER_SIZE = 8
VIS_SOLUTION_ENTRY_MFC = "lime"
VIS_SOLUTION_ENTRY_MEC = "black"
VIS_SOLUTION_EXIT_MARKER_SIZE = 8
VIS_SOLUTION_EXIT_MFC = "red"
VIS_SOLUTION_EXIT_MEC = "black"
