"""
World, physics and genetic algorithm constants.

Screen space: x grows to the right, y grows downward, units are pixels.
"""

# World dimensions
WORLD_WIDTH = 800
WORLD_HEIGHT = 600
GROUND_HEIGHT = 10

# Bird physics
GRAVITY = 0.6
DAMPING = 0.9            # air resistance applied after gravity
LIFT = -10               # flap overwrites velocity with this
VELOCITY_LIMIT = 10      # terminal velocity (both directions)
BIRD_X = 50              # birds never move horizontally
BIRD_SIZE = 24           # square hitbox
BIRD_START_Y = WORLD_HEIGHT / 2
FLAP_THRESHOLD = 0.5

# Pipes
PIPE_SPEED = 3           # px per tick
PIPE_SPAWN_RATE = 100    # ticks between pipes
PIPE_GAP = 150
PIPE_WIDTH = 60
PIPE_MARGIN = 50         # min distance between the gap and the screen edges

# Challenge mode
MIN_GAP_SIZE = 100
MAX_GAP_SIZE = 250
GAP_CHANGE_RATE = 1.5    # px per tick toward the target gap
GAP_SNAP_DISTANCE = 0.5
GAP_CHANGE_MIN = 10
GAP_CHANGE_MAX = 30
DIRECTION_TIMER_RANGE = (60, 180)
GAP_TIMER_RANGE = (30, 90)
MIN_PIPE_VERTICAL_SPEED = 1
MAX_PIPE_VERTICAL_SPEED = 8  # 80% of VELOCITY_LIMIT

# Genetic algorithm
POPULATION_SIZE = 50
MUTATION_RATE = 0.1      # chance for each weight/bias to be perturbed
MUTATION_AMOUNT = 0.1    # std-dev scale of the gaussian perturbation

# Network topology: y, pipe x, gap centre y, velocity -> flap
INPUT_NODES = 4
HIDDEN_NODES = 6
OUTPUT_NODES = 1

# Speed multipliers offered by the viewer
SPEED_STEPS = (1, 2, 5, 10, 50, 100, 200, 500, 1000)
