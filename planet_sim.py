#!/usr/bin/env python3
"""
Planet Playground application entry point and UI/renderer coordination.

What this module does
- Starts two event loops: a Pygame rendering thread (viewport) and the Dear PyGui UI
  (running on the main thread).
- Shares one SimulationController between them. Neither loop edits bodies directly:
  input events and control-panel changes are submitted as commands, and the viewport
  thread applies them between ticks.

Threading model
- PygameRenderer runs in a background thread and performs, once per frame: input
  handling (pointer -> commands), controller.advance() (drain commands, then one tick
  while running), and drawing from controller.snapshot().
- The UI class runs in the main thread via Dear PyGui. Its callbacks only call
  controller.submit(); a periodic frame callback refreshes the read-only labels.

Units and conventions
- Screen units throughout: positions and radii in pixels, velocities in pixels per tick.
- Colors are RGB tuples in 0..255.

Running
1) Install dependencies: `pip install -e .`
2) Run this module: `python planet_sim.py`

Windows/OS notes
- Two windows will open: the viewport (Pygame) and the controls (Dear PyGui). Closing either
  will shut down the application cleanly.
"""

import logging
import math
import threading

# GUI and Rendering libs
import pygame
from pygame import gfxdraw
import dearpygui.dearpygui as dpg

from planetsim import commands as cmd
from planetsim.constants import (
    BACKGROUND_COLOR,
    DEFAULT_BODY_COUNT,
    DEFAULT_BODY_RADIUS,
    DEFAULT_LINE_OPACITY,
    DEFAULT_REST_LENGTH,
    DEFAULT_SPRING_CONSTANT,
    HOVERED_BODY_COLOR,
    LINE_COLOR,
    SAFE_COORD_LIMIT,
    SELECTED_BODY_COLOR,
    SELECTION_COLOR,
    TARGET_FPS,
    VIEW_HEIGHT,
    VIEW_WIDTH,
)
from planetsim.controller import SimulationController, SimulationState
from planetsim.snapshots import Frame, line_width

logger = logging.getLogger("planet_sim")

# ============================================================
# Pygame Renderer Thread
# ============================================================


class PygameRenderer(threading.Thread):
    """
    Pygame loop: draws bodies and their connecting lines.
    Turns mouse events into selection/drag commands.
    """
    def __init__(self, sim: SimulationController):
        super().__init__(daemon=True)
        self.sim = sim
        self.surface = None
        self.clock = None
        self.running = True

    def run(self):
        pygame.init()
        pygame.display.set_caption("Planet Playground - Viewport")
        self.surface = pygame.display.set_mode((VIEW_WIDTH, VIEW_HEIGHT), pygame.RESIZABLE)
        self.sim.set_area(VIEW_WIDTH, VIEW_HEIGHT)
        self.clock = pygame.time.Clock()
        logger.info("Viewport started (%dx%d)", VIEW_WIDTH, VIEW_HEIGHT)

        while self.running:
            self.handle_events()

            # Commands first, then at most one tick
            self.sim.advance()

            self.draw(self.sim.snapshot())

            # Limit FPS
            self.clock.tick(TARGET_FPS)

        pygame.quit()
        logger.info("Viewport closed")

    def handle_events(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False

            elif event.type == pygame.VIDEORESIZE:
                self.surface = pygame.display.set_mode((event.w, event.h), pygame.RESIZABLE)
                self.sim.submit(cmd.SetParameter("width", event.w))
                self.sim.submit(cmd.SetParameter("height", event.h))

            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                self.sim.submit(cmd.PointerDown(event.pos))

            elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
                self.sim.submit(cmd.PointerUp())

            elif event.type == pygame.MOUSEMOTION:
                self.sim.submit(cmd.PointerMove(event.pos))

            elif event.type == pygame.KEYDOWN and event.key == pygame.K_SPACE:
                self.sim.submit(cmd.TogglePlay())

    def draw(self, frame: Frame):
        surf = self.surface
        surf.fill(BACKGROUND_COLOR)

        # A stopped simulation leaves a blank surface
        if frame.state == SimulationState.STOPPED.value:
            pygame.display.flip()
            return

        draw_connections(surf, frame)

        for b in frame.bodies:
            screen_pos_s = _safe_point(b.position)
            if not screen_pos_s:
                continue
            vis_r = max(1, int(b.radius))
            if b.selected:
                color = SELECTED_BODY_COLOR
            elif b.hovered:
                color = HOVERED_BODY_COLOR
            else:
                color = b.color
            try:
                gfxdraw.filled_circle(surf, screen_pos_s[0], screen_pos_s[1], vis_r, color)
                gfxdraw.aacircle(surf, screen_pos_s[0], screen_pos_s[1], vis_r, color)
            except Exception:
                pass

            if b.selected:
                draw_selection_marker(surf, screen_pos_s, b.radius)

        draw_text(surf, "Left-drag: move planet | Space: Start/Pause", 10, 10, (60, 60, 60))
        draw_text(surf, f"Planets: {len(frame.bodies)}  [{frame.state}]", 10, 30, (60, 60, 60))

        pygame.display.flip()


def draw_connections(surface, frame: Frame):
    # Opacity is a per-frame setting; one overlay keeps the blend cheap
    if not frame.connections:
        return
    overlay = pygame.Surface(surface.get_size(), pygame.SRCALPHA)
    alpha = int(round(frame.connections[0].opacity * 255))
    rgba = (LINE_COLOR[0], LINE_COLOR[1], LINE_COLOR[2], alpha)
    for c in frame.connections:
        start_s = _safe_point(c.start)
        end_s = _safe_point(c.end)
        if start_s is None or end_s is None:
            continue
        try:
            pygame.draw.line(overlay, rgba, start_s, end_s, line_width(c, frame.gravity))
        except Exception:
            pass
    surface.blit(overlay, (0, 0))


def draw_selection_marker(surface, center, radius):
    # Ring plus a cross that reaches 1.5 radii out
    cx, cy = center
    try:
        pygame.draw.circle(surface, SELECTION_COLOR, center, int(radius + 2), 3)
        plus = int(radius * 1.5)
        pygame.draw.line(surface, SELECTION_COLOR, (cx - plus, cy), (cx + plus, cy), 2)
        pygame.draw.line(surface, SELECTION_COLOR, (cx, cy - plus), (cx, cy + plus), 2)
    except Exception:
        pass


_cached_font = None


def draw_text(surface, text, x, y, color):
    global _cached_font
    if not pygame.font.get_init():
        try:
            pygame.font.init()
        except Exception:
            pass
    if _cached_font is None:
        try:
            _cached_font = pygame.font.SysFont("consolas", 16)
        except Exception:
            _cached_font = pygame.font.Font(None, 16)
    img = _cached_font.render(text, True, color)
    surface.blit(img, (x, y))


def _safe_point(pt):
    try:
        if not (math.isfinite(pt[0]) and math.isfinite(pt[1])):
            return None
        x, y = int(pt[0]), int(pt[1])
    except Exception:
        return None
    if -SAFE_COORD_LIMIT <= x <= SAFE_COORD_LIMIT and -SAFE_COORD_LIMIT <= y <= SAFE_COORD_LIMIT:
        return (x, y)
    return None

# ============================================================
# Dear PyGui UI
# ============================================================


class UI:
    """
    Dear PyGui control panel: sliders for count, radius, spring constant, rest length
    and line opacity; physics toggles; start/pause and stop buttons.
    """
    def __init__(self, sim: SimulationController, renderer: PygameRenderer):
        self.sim = sim
        self.renderer = renderer
        self.status_id = None
        self.play_button_id = None

        self._build_ui()
        self._schedule_sync()

    def _schedule_sync(self):
        """Reschedule the periodic sync callback using frame callbacks (approx ~10Hz)."""
        try:
            current = dpg.get_frame_count()
        except Exception:
            current = 0
        dpg.set_frame_callback(current + 6, self._sync_ui_with_sim)

    def _submit_parameter(self, name):
        return lambda s, a, u: self.sim.submit(cmd.SetParameter(name, a))

    # -----------------------
    # UI Construction
    # -----------------------

    def _build_ui(self):
        dpg.create_context()
        dpg.create_viewport(title='Planet Playground - Controls', width=440, height=420)

        with dpg.window(label="Controls", width=420, height=400, pos=(10, 10), tag="main_window"):
            dpg.add_text("Planets")
            dpg.add_slider_int(label="Number", min_value=0, max_value=100, default_value=DEFAULT_BODY_COUNT,
                               width=250, callback=self._submit_parameter("body_count"), tag="count_slider")
            dpg.add_slider_float(label="Radius", min_value=1.0, max_value=50.0, default_value=DEFAULT_BODY_RADIUS,
                                 width=250, callback=self._submit_parameter("body_radius"), tag="radius_slider")

            dpg.add_separator()

            dpg.add_text("Springs")
            dpg.add_slider_float(label="Spring constant", min_value=0.0, max_value=1.0,
                                 default_value=DEFAULT_SPRING_CONSTANT, width=250,
                                 callback=self._submit_parameter("spring_constant"), tag="spring_slider")
            dpg.add_slider_float(label="Rest length", min_value=0.0, max_value=1000.0,
                                 default_value=DEFAULT_REST_LENGTH, width=250,
                                 callback=self._submit_parameter("rest_length"), tag="rest_length_slider")
            dpg.add_slider_float(label="Line opacity", min_value=0.0, max_value=1.0,
                                 default_value=DEFAULT_LINE_OPACITY, width=250,
                                 callback=self._submit_parameter("line_opacity"), tag="opacity_slider")

            dpg.add_separator()

            dpg.add_text("Physics")
            with dpg.group(horizontal=True):
                dpg.add_checkbox(label="Gravity", default_value=self.sim.params.gravity,
                                 callback=self._submit_parameter("gravity"))
                dpg.add_checkbox(label="Collide", default_value=self.sim.params.collide,
                                 callback=self._submit_parameter("collide"))
                dpg.add_checkbox(label="Merge", default_value=self.sim.params.merging,
                                 callback=self._submit_parameter("merging"))

            dpg.add_separator()

            dpg.add_text("Simulation Controls")
            with dpg.group(horizontal=True):
                self.play_button_id = dpg.add_button(label="Start Simulation", callback=self._toggle_play)
                dpg.add_button(label="End Simulation", callback=lambda: self.sim.submit(cmd.Stop()))
                dpg.add_button(label="New Planets", callback=lambda: self.sim.submit(cmd.Reset()))
            self.status_id = dpg.add_text("")

        dpg.setup_dearpygui()
        dpg.show_viewport()
        dpg.set_primary_window("main_window", True)

    # -----------------------
    # UI Callbacks
    # -----------------------

    def _toggle_play(self):
        self.sim.submit(cmd.TogglePlay())

    def _sync_ui_with_sim(self):
        with self.sim.lock:
            state = self.sim.state
            count = len(self.sim.bodies)
            ticks = self.sim.tick_count
        label = "Pause Simulation" if state == SimulationState.RUNNING else "Start Simulation"
        dpg.configure_item(self.play_button_id, label=label)
        dpg.set_value(self.status_id, f"State: {state.value}  Planets: {count}  Ticks: {ticks}")
        if not self.renderer.is_alive():
            dpg.stop_dearpygui()
            return
        self._schedule_sync()

# ============================================================
# Application Entry
# ============================================================


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    sim = SimulationController()

    renderer = PygameRenderer(sim)

    # Start Pygame renderer thread
    renderer.start()

    ui = UI(sim, renderer)

    # Keyboard shortcut in UI window to toggle play/pause (Space)
    with dpg.handler_registry():
        def key_press(sender, app_data):
            if app_data == dpg.mvKey_Spacebar:
                ui._toggle_play()
        dpg.add_key_press_handler(callback=key_press)

    # Planets move as soon as the windows open
    sim.submit(cmd.Start())

    # Run Dear PyGui event loop
    try:
        dpg.start_dearpygui()
    finally:
        renderer.running = False
        renderer.join(timeout=2.0)
        dpg.destroy_context()


if __name__ == "__main__":
    main()
