import pygame
from typing import Tuple
import config
from sim.world import World
from .colors import WHITE, CYAN, AMBER, GREY, GRID

def world_to_screen(world: World, x_m: float, y_m: float) -> Tuple[int, int]:
    # View center at screen center; +x to right, +y up -> screen y inverted
    res = world.view.get_resolution()
    cx, cy = world.view.get_center()
    sx = int(config.SCREEN_W / 2 + (x_m - cx) * res)
    sy = int(config.SCREEN_H / 2 - (y_m - cy) * res)
    return sx, sy

def screen_to_world(world: World, sx: int, sy: int) -> Tuple[float, float]:
    res = world.view.get_resolution()
    cx, cy = world.view.get_center()
    return (
        cx + (sx - config.SCREEN_W / 2) / res,
        cy - (sy - config.SCREEN_H / 2) / res,
    )

def draw_grid(screen, world: World, spacing_m: float = 1000.0):
    res = world.view.get_resolution()
    step_px = spacing_m * res
    if step_px < 8:
        return
    ox, oy = world_to_screen(world, 0.0, 0.0)
    x = ox % step_px
    while x < config.SCREEN_W:
        pygame.draw.line(screen, GRID, (int(x), 0), (int(x), config.SCREEN_H))
        x += step_px
    y = oy % step_px
    while y < config.SCREEN_H:
        pygame.draw.line(screen, GRID, (0, int(y)), (config.SCREEN_W, int(y)))
        y += step_px

def draw_marker(screen, font, world: World, name: str):
    x, y = world_to_screen(world, *world.markers[name])
    color = AMBER if name == world.selected else CYAN
    pygame.draw.circle(screen, color, (x, y), 6)
    label = font.render(name, True, WHITE)
    screen.blit(label, (x + 8, y - 8))

def render(screen, font, world: World):
    screen.fill(config.BG_COLOR)
    draw_grid(screen, world)
    for name in world.markers:
        draw_marker(screen, font, world, name)
    # crosshair at view center
    mx, my = config.SCREEN_W // 2, config.SCREEN_H // 2
    pygame.draw.line(screen, GREY, (mx - 6, my), (mx + 6, my))
    pygame.draw.line(screen, GREY, (mx, my - 6), (mx, my + 6))
