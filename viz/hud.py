import pygame
from evtarget.models import EventType
from sim.world import World
import config
from .colors import WHITE, AMBER, RED, GREEN


def draw_hud(screen, font, world: World):
    """Side HUD panel showing controls, listener state and the event log."""
    screen_w, screen_h = screen.get_size()
    panel_w = int(screen_w * config.HUD_PANEL_FRACTION)
    panel_x = screen_w - panel_w
    margin_x, margin_y = 12, 10
    line_spacing = 20

    # translucent panel
    hud_surface = pygame.Surface((panel_w, screen_h), pygame.SRCALPHA)
    hud_surface.fill((0, 0, 0, 180))
    y = margin_y

    cx, cy = world.view.get_center()
    header_lines = [
        f"t = {world.time_s:6.1f}s{'  (paused)' if world.paused else ''}",
        f"Center: ({cx:.0f}, {cy:.0f})  Zoom: {world.view.get_zoom()}",
        f"Selected: {world.selected or 'None'}",
        f"Click listeners: {world.listener_count(EventType.CLICK)}",
        "",
        "Controls:",
        "[CLICK]  Place / select marker",
        "[ARROWS] Pan view",
        "[+/-]    Zoom",
        "[S]      Toggle stopper listener",
        "[O]      Arm / disarm one-shot",
        "[1/2/3]  Load scenario",
        "[SPACE]  Pause / Resume",
        "",
    ]

    for line in header_lines:
        surf = font.render(line, True, WHITE)
        hud_surface.blit(surf, (margin_x, y))
        y += line_spacing

    status = [
        (f"Stopper: {'ON' if world.stopper_enabled else 'OFF'}",
         RED if world.stopper_enabled else GREEN),
        (f"One-shot: {'ARMED' if world.once_armed else 'idle'}",
         AMBER if world.once_armed else GREEN),
    ]
    for line, color in status:
        hud_surface.blit(font.render(line, True, color), (margin_x, y))
        y += line_spacing

    y += line_spacing // 2
    hud_surface.blit(font.render("Events:", True, WHITE), (margin_x, y))
    y += line_spacing

    for line in world.log:
        if y > screen_h - line_spacing:
            break
        hud_surface.blit(font.render(line, True, WHITE), (margin_x, y))
        y += line_spacing

    screen.blit(hud_surface, (panel_x, 0))
