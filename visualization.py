# visualization.py
"""
Handles the visualization of the particle ring using Pygame.

The Visualizer owns the window and is the boundary between the user and
the simulation: it turns window, mouse and keyboard events into calls on
the Simulation, and draws the particles and outline each frame.
"""
import logging
import pygame
from typing import List, Optional, Tuple

from constants import (
    BACKGROUND_COLOR, FPS, OUTLINE_ALPHA, OUTLINE_COLOR, OUTLINE_WIDTH,
    UI_BACKGROUND_ALPHA, UI_PANEL_WIDTH, DEFAULT_WINDOW_SIZE,
    DEFAULT_COUNT_STEP, DEFAULT_REPULSE_STEP
)
from particle import ParticleField

# Forward reference for type hinting to avoid circular import
from typing import TYPE_CHECKING
if TYPE_CHECKING:
    from simulation import Simulation

RenderItem = Tuple[Tuple[float, float], float, Tuple[int, int, int]]


# --- Data Contracts ---
#
# to_render_items(field: ParticleField) -> List[((x, y), radius, (r, g, b))]:
#   - One entry per particle, in field order. Plain Python values, so the
#     result does not alias the field's arrays.
#
# class Visualizer:
#   - __init__(self, vis_params: Optional[dict] = None):
#     - Inputs:
#       - vis_params: "window_width", "window_height", "count_step",
#         "repulse_step" from the configuration. All optional.
#     - Side Effects: Initializes Pygame and creates a resizable window.
#
#   - handle_event(self, event, simulation) -> bool:
#     - Side Effects: Forwards resize, pointer and control events to the
#       simulation's setters.
#     - Outputs: False if the user asked to quit, True otherwise.
#
#   - draw(self, simulation: "Simulation") -> bool:
#     - Side Effects: Processes pending events, renders particles, the
#       outline and the control panel, and waits for the next frame.
#     - Outputs: False if the user has quit, True otherwise.

def to_render_items(field: ParticleField) -> List[RenderItem]:
    """Maps every particle to the (position, radius, color) the renderer draws."""
    positions = field.positions.tolist()
    radii = field.radii.tolist()
    colors = field.colors.tolist()
    return [
        ((x, y), radius, (r, g, b))
        for (x, y), radius, (r, g, b) in zip(positions, radii, colors)
    ]


class Visualizer:
    """
    Renders the ring and provides the keyboard control panel.
    """
    def __init__(self, vis_params: Optional[dict] = None):
        """
        Initializes Pygame and the display window.
        """
        vis_params = vis_params if vis_params is not None else {}

        pygame.init()
        pygame.font.init()

        width = vis_params.get('window_width', DEFAULT_WINDOW_SIZE[0])
        height = vis_params.get('window_height', DEFAULT_WINDOW_SIZE[1])
        self.screen = pygame.display.set_mode((width, height), pygame.RESIZABLE)
        self._set_size(width, height)

        pygame.display.set_caption("Particle Ring")
        self.clock = pygame.time.Clock()

        self.count_step = vis_params.get('count_step', DEFAULT_COUNT_STEP)
        self.repulse_step = vis_params.get('repulse_step', DEFAULT_REPULSE_STEP)

        # SysFont silently substitutes a missing font, so look it up first.
        if pygame.font.match_font("Segoe UI"):
            font_name, font_size = "Segoe UI", 14
        else:
            logging.warning("Segoe UI font not found, falling back to default sans-serif.")
            font_name, font_size = None, 18
        self.font_main = pygame.font.SysFont(font_name, font_size)
        self.font_main_bold = pygame.font.SysFont(font_name, font_size, bold=True)

        # --- UI Color Palette ---
        self.text_color_key = (200, 200, 200)
        self.text_color_value = (255, 255, 255)
        self.param_box_color = (60, 60, 60, 160)
        self.param_box_spacing = 4
        self.panel_pos = (10, 10)

        logging.info(f"Visualizer initialized with Pygame display ({width}x{height}).")

    def _set_size(self, width: int, height: int):
        """Stores the viewport size and (re)creates the size-dependent surfaces."""
        self.width = width
        self.height = height
        # The outline is drawn on its own surface so the stroke alpha applies.
        self.outline_surface = pygame.Surface((width, height), pygame.SRCALPHA)
        self.ui_panel_surface = pygame.Surface((UI_PANEL_WIDTH, height), pygame.SRCALPHA)
        self.ui_panel_surface.fill((40, 40, 40, UI_BACKGROUND_ALPHA))

    @property
    def size(self) -> Tuple[int, int]:
        return self.width, self.height

    def handle_event(self, event: pygame.event.Event, simulation: "Simulation") -> bool:
        """
        Applies one Pygame event to the simulation.

        Returns:
            bool: False if the event asks the application to quit.
        """
        if event.type == pygame.QUIT:
            logging.info("Quit event received. Shutting down visualizer.")
            return False

        if event.type == pygame.VIDEORESIZE:
            width, height = max(1, event.w), max(1, event.h)
            self.screen = pygame.display.set_mode((width, height), pygame.RESIZABLE)
            self._set_size(width, height)
            simulation.resize(width, height)

        elif event.type == pygame.MOUSEMOTION:
            simulation.set_pointer(*event.pos)

        elif event.type == pygame.WINDOWLEAVE:
            simulation.clear_pointer()

        elif event.type == pygame.KEYDOWN:
            if event.key == pygame.K_ESCAPE:
                logging.info("ESC key pressed. Shutting down visualizer.")
                return False

            count_step = 1 if event.mod & pygame.KMOD_SHIFT else self.count_step
            config = simulation.config
            if event.key == pygame.K_UP:
                simulation.set_particle_count(config.particle_count + count_step)
            elif event.key == pygame.K_DOWN:
                simulation.set_particle_count(config.particle_count - count_step)
            elif event.key == pygame.K_RIGHT:
                simulation.set_repulse_force(round(config.repulse_force + self.repulse_step, 4))
            elif event.key == pygame.K_LEFT:
                simulation.set_repulse_force(round(config.repulse_force - self.repulse_step, 4))
            elif event.key == pygame.K_l:
                simulation.toggle_outline()

        return True

    def _draw_particles(self, field: ParticleField):
        for position, radius, color in to_render_items(field):
            pygame.draw.circle(self.screen, color, position, radius)

    def _draw_outline(self, outline):
        self.outline_surface.fill((0, 0, 0, 0))
        stroke_color = (*OUTLINE_COLOR, OUTLINE_ALPHA)
        pygame.draw.lines(self.outline_surface, stroke_color, False, outline.tolist(), OUTLINE_WIDTH)
        self.screen.blit(self.outline_surface, (0, 0))

    def _draw_control_panel(self, simulation: "Simulation"):
        """Renders the live control values in a list of individual, transparent boxes."""
        config = simulation.config
        entries = [
            ("Particles", str(config.particle_count), "Up / Down (Shift: 1)"),
            ("Repulse Force", f"{config.repulse_force:.2f}", "Left / Right"),
            ("Outline", "On" if config.show_outline else "Off", "L"),
        ]

        box_padding = 8
        line_height = self.font_main.get_linesize()
        box_height = 2 * line_height + 2 * box_padding
        panel_x, current_y = self.panel_pos
        panel_width = UI_PANEL_WIDTH - 2 * panel_x
        panel_height = len(entries) * (box_height + self.param_box_spacing) + 2 * current_y

        self.screen.blit(self.ui_panel_surface, (0, 0), area=pygame.Rect(0, 0, UI_PANEL_WIDTH, panel_height))

        for name, value, keys in entries:
            box_rect = pygame.Rect(panel_x, current_y, panel_width, box_height)
            pygame.draw.rect(self.screen, self.param_box_color, box_rect, border_radius=6)

            text_y = current_y + box_padding
            key_surf = self.font_main_bold.render(name, True, self.text_color_key)
            value_surf = self.font_main.render(value, True, self.text_color_value)
            hint_surf = self.font_main.render(keys, True, self.text_color_key)
            self.screen.blit(key_surf, (panel_x + box_padding, text_y))
            self.screen.blit(value_surf, value_surf.get_rect(topright=(box_rect.right - box_padding, text_y)))
            self.screen.blit(hint_surf, (panel_x + box_padding, text_y + line_height))

            current_y += box_height + self.param_box_spacing

    def draw(self, simulation: "Simulation") -> bool:
        """
        Handles events, then draws the particles, outline and control panel.

        Returns:
            bool: False if the simulation should exit, True otherwise.
        """
        for event in pygame.event.get():
            if not self.handle_event(event, simulation):
                return False

        self.screen.fill(BACKGROUND_COLOR)
        self._draw_particles(simulation.field)
        if simulation.outline is not None:
            self._draw_outline(simulation.outline)
        self._draw_control_panel(simulation)

        pygame.display.flip()
        self.clock.tick(FPS)
        return True

    def close(self):
        """Shuts down Pygame."""
        pygame.font.quit()
        pygame.quit()
