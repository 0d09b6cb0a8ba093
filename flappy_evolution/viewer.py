"""
Pygame front-end for the engine.

The viewer only reads engine state (birds, pipes, counters, network
snapshots) and calls the engine's public controls. Keys:

    SPACE  pause / resume
    F      fast mode (no drawing, train as fast as possible)
    D      draw "what the lead bird sees" to the next gap
    N      network visualization for the lead bird
    I      print inputs/outputs of the lead bird when it flaps
    C      challenge mode on/off
    1-8    pipe vertical speed (challenge mode)
    + / -  speed multiplier (ticks per frame)
    R      start over with a fresh population
    Q/ESC  quit
"""

import pygame

from .constants import (
    BIRD_SIZE,
    BIRD_X,
    GROUND_HEIGHT,
    PIPE_WIDTH,
    SPEED_STEPS,
    WORLD_HEIGHT,
    WORLD_WIDTH,
)
from .engine import GameEngine

FPS = 60

SKY = (112, 197, 206)
PIPE_GREEN = (83, 170, 60)
PIPE_DARK = (40, 110, 30)
GROUND = (222, 216, 149)
BIRD_YELLOW = (250, 210, 60)
LEAD_RED = (235, 80, 60)
WHITE = (255, 255, 255)

INPUT_LABELS = ("y", "pipe_x", "gap_y", "vel")


def weight_color(w):
    return (100, 255, 100) if w > 0 else (255, 100, 100)


def activation_color(a):
    """Grey scale for [-1, 1] activations."""
    level = int(max(0.0, min(1.0, (a + 1) / 2)) * 255)
    return (level, level, level)


def draw_pipe(win, pipe):
    top = pygame.Rect(int(pipe.x), 0, PIPE_WIDTH, int(pipe.top_height))
    bottom_y = int(pipe.bottom)
    bottom = pygame.Rect(int(pipe.x), bottom_y, PIPE_WIDTH, WORLD_HEIGHT - bottom_y)
    for rect in (top, bottom):
        pygame.draw.rect(win, PIPE_GREEN, rect)
        pygame.draw.rect(win, PIPE_DARK, rect, 3)


def draw_bird(win, bird, lead=False):
    color = LEAD_RED if lead else BIRD_YELLOW
    rect = pygame.Rect(BIRD_X, int(bird.y), BIRD_SIZE, BIRD_SIZE)
    pygame.draw.ellipse(win, color, rect)
    pygame.draw.ellipse(win, (0, 0, 0), rect, 1)


def draw_sight_lines(win, bird, pipe):
    """Lines from the bird to the edges of the gap it is aiming for."""
    if pipe is None:
        return
    centre = (BIRD_X + BIRD_SIZE / 2, bird.y + BIRD_SIZE / 2)
    pipe_mid_x = pipe.x + PIPE_WIDTH / 2
    pygame.draw.line(win, (255, 0, 0), centre, (pipe_mid_x, pipe.top_height), 2)
    pygame.draw.line(win, (255, 0, 0), centre, (pipe_mid_x, pipe.bottom), 2)


def draw_network(win, font, snapshot):
    """
    Visualization of the lead bird's network.

    - Inputs on the left, hidden layer in the middle, flap output on the right.
    - Nodes are shaded by their last activation.
    - Connections: green for positive weights, red for negative, thickness ~ |weight|.
    """
    if snapshot is None:
        return

    panel_width, panel_height = 260, 220
    panel_x, panel_y = WORLD_WIDTH - panel_width - 10, WORLD_HEIGHT - panel_height - 40

    panel_surf = pygame.Surface((panel_width, panel_height), pygame.SRCALPHA)
    panel_surf.fill((0, 0, 0, 120))
    win.blit(panel_surf, (panel_x, panel_y))
    pygame.draw.rect(win, (230, 230, 230), (panel_x, panel_y, panel_width, panel_height), 2)

    def column(count, x):
        step = panel_height / (count + 1)
        return [(x, int(panel_y + step * (i + 1))) for i in range(count)]

    inputs = column(snapshot.input_nodes, panel_x + 60)
    hidden = column(snapshot.hidden_nodes, panel_x + panel_width // 2 + 20)
    outputs = column(snapshot.output_nodes, panel_x + panel_width - 30)

    for i, start in enumerate(inputs):
        for j, end in enumerate(hidden):
            w = snapshot.weights_ih[i][j]
            pygame.draw.line(win, weight_color(w), start, end, max(1, min(4, int(abs(w) * 2))))
    for j, start in enumerate(hidden):
        for k, end in enumerate(outputs):
            w = snapshot.weights_ho[j][k]
            pygame.draw.line(win, weight_color(w), start, end, max(1, min(4, int(abs(w) * 2))))

    def node(pos, activation, radius):
        fill = activation_color(activation)
        pygame.draw.circle(win, fill, pos, radius)
        pygame.draw.circle(win, WHITE, pos, radius, 2)

    for i, pos in enumerate(inputs):
        a = snapshot.last_inputs[i] * 2 - 1 if snapshot.last_inputs else 0.0
        node(pos, a, 8)
        if i < len(INPUT_LABELS):
            text = font.render(INPUT_LABELS[i], True, WHITE)
            win.blit(text, (pos[0] - text.get_width() - 12, pos[1] - text.get_height() / 2))
    for j, pos in enumerate(hidden):
        a = snapshot.last_hidden[j] if snapshot.last_hidden else 0.0
        node(pos, a, 8)
    for k, pos in enumerate(outputs):
        a = snapshot.last_outputs[k] * 2 - 1 if snapshot.last_outputs else 0.0
        node(pos, a, 10)
        label = font.render("flap", True, WHITE)
        win.blit(label, (pos[0] - label.get_width() / 2, pos[1] + 14))


class Viewer:
    """Window, clock and UI toggles around one engine."""

    def __init__(self, engine=None, population_size=None, seed=None):
        pygame.init()
        self.win = pygame.display.set_mode((WORLD_WIDTH, WORLD_HEIGHT))
        pygame.display.set_caption("Neuroevolution Flappy Bird")
        self.stat_font = pygame.font.SysFont("bold", 36)
        self.debug_font = pygame.font.SysFont("bold", 18)
        self.clock = pygame.time.Clock()

        self.population_size = population_size
        self.seed = seed
        self.engine = engine if engine is not None else self._new_engine()

        self.paused = False
        self.fast_mode = False
        self.draw_lines = False
        self.visualize_net = True
        self.inspect_mode = False
        self.speed_index = 0
        self.running = True

    def _new_engine(self):
        kwargs = {"seed": self.seed}
        if self.population_size is not None:
            kwargs["population_size"] = self.population_size
        return GameEngine(**kwargs)

    @property
    def speed(self):
        return SPEED_STEPS[self.speed_index]

    def reset(self):
        """Throw the population away and start from generation 1."""
        challenge, vertical_speed = self.engine.challenge_mode, self.engine.pipe_vertical_speed
        self.engine = self._new_engine()
        self.engine.set_challenge_mode(challenge, vertical_speed)
        self.speed_index = 0
        self.paused = True
        self.fast_mode = False
        print("[INFO] New population")

    def handle_key(self, key):
        engine = self.engine
        if key in (pygame.K_q, pygame.K_ESCAPE):
            self.running = False
        elif key == pygame.K_SPACE:
            self.paused = not self.paused
        elif key == pygame.K_f:
            self.fast_mode = not self.fast_mode
            print(f"[DEBUG] FAST_MODE = {self.fast_mode}")
        elif key == pygame.K_d:
            self.draw_lines = not self.draw_lines
            print(f"[DEBUG] DRAW_LINES = {self.draw_lines}")
        elif key == pygame.K_n:
            self.visualize_net = not self.visualize_net
            print(f"[DEBUG] VISUALIZE_NET = {self.visualize_net}")
        elif key == pygame.K_i:
            self.inspect_mode = not self.inspect_mode
            print(f"[DEBUG] INSPECT_MODE = {self.inspect_mode}")
        elif key == pygame.K_c:
            engine.set_challenge_mode(not engine.challenge_mode)
            print(f"[DEBUG] CHALLENGE_MODE = {engine.challenge_mode}")
        elif pygame.K_1 <= key <= pygame.K_8:
            if engine.challenge_mode:
                engine.set_challenge_mode(True, key - pygame.K_0)
                print(f"[DEBUG] PIPE_VERTICAL_SPEED = {engine.pipe_vertical_speed}")
        elif key in (pygame.K_PLUS, pygame.K_EQUALS, pygame.K_KP_PLUS):
            self.speed_index = min(self.speed_index + 1, len(SPEED_STEPS) - 1)
        elif key in (pygame.K_MINUS, pygame.K_KP_MINUS):
            self.speed_index = max(self.speed_index - 1, 0)
        elif key == pygame.K_r:
            self.reset()

    def handle_events(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.KEYDOWN:
                self.handle_key(event.key)

    def tick(self):
        """Run `speed` engine updates, or nothing while paused."""
        if self.paused:
            return
        engine = self.engine
        for _ in range(self.speed):
            engine.update()
        if self.inspect_mode:
            lead = engine.best_bird().net
            if lead.last_outputs is not None and lead.last_outputs[0] > 0.5:
                inputs = ", ".join(f"{v:.3f}" for v in lead.last_inputs)
                print(f"[INSPECT] inputs=({inputs}) output={lead.last_outputs[0]:.3f} -> FLAP")

    def draw_window(self):
        """Draw all game elements on the screen."""
        engine = self.engine
        win = self.win
        win.fill(SKY)

        for pipe in engine.pipes:
            draw_pipe(win, pipe)

        pygame.draw.rect(win, GROUND, (0, WORLD_HEIGHT - GROUND_HEIGHT, WORLD_WIDTH, GROUND_HEIGHT))

        lead = engine.best_bird()
        nearest = next((p for p in engine.pipes if p.x + PIPE_WIDTH > BIRD_X), None)
        for bird in engine.birds:
            if bird.alive and bird is not lead:
                draw_bird(win, bird)
        if lead.alive:
            if self.draw_lines:
                draw_sight_lines(win, lead, nearest)
            draw_bird(win, lead, lead=True)

        # HUD
        score_label = self.stat_font.render(f"Score: {engine.score}", 1, WHITE)
        win.blit(score_label, (WORLD_WIDTH - score_label.get_width() - 15, 10))
        high_label = self.stat_font.render(f"Best: {engine.high_score}", 1, WHITE)
        win.blit(high_label, (WORLD_WIDTH - high_label.get_width() - 15, 40))

        gen_label = self.stat_font.render(f"Gen: {engine.generation}", 1, WHITE)
        win.blit(gen_label, (10, 10))
        alive_label = self.stat_font.render(
            f"Alive: {engine.alive_count}/{engine.population_size}", 1, WHITE
        )
        win.blit(alive_label, (10, 40))

        mode_text = [f"{self.speed}x"]
        if self.paused:
            mode_text.append("PAUSED")
        if engine.challenge_mode:
            mode_text.append(f"CHALLENGE {engine.pipe_vertical_speed}")
        if self.draw_lines:
            mode_text.append("LINES")
        if self.visualize_net:
            mode_text.append("NN")
        if self.inspect_mode:
            mode_text.append("INSPECT")
        label = self.debug_font.render(" | ".join(mode_text), True, (255, 255, 0))
        win.blit(label, (10, WORLD_HEIGHT - GROUND_HEIGHT - 20))

        if self.visualize_net:
            draw_network(win, self.debug_font, lead.brain)

        pygame.display.update()

    def draw_headless(self):
        """Fast mode: only a status line, refreshed a few times per second."""
        self.win.fill((30, 30, 30))
        engine = self.engine
        text = (f"FAST MODE  gen {engine.generation}  alive {engine.alive_count}"
                f"  score {engine.score}  best {engine.high_score}  {self.speed}x")
        label = self.debug_font.render(text, True, WHITE)
        self.win.blit(label, (10, 10))
        pygame.display.update()

    def frame(self):
        self.handle_events()
        self.tick()
        if self.fast_mode:
            self.draw_headless()
        else:
            self.draw_window()

    def run(self):
        print("\n[INFO] Keys: SPACE=pause, F=fast, D=lines, N=NN, I=inspect, "
              "C=challenge, 1-8=pipe speed, +/-=speed, R=reset, Q=quit\n")
        while self.running:
            self.clock.tick(240 if self.fast_mode else FPS)
            self.frame()
        pygame.quit()
