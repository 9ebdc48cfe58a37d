import pygame, sys, argparse, logging
from sim.world import World
from sim.scenarios import SCENARIOS
import config
from viz.pygame_app import render, screen_to_world
from viz.hud import draw_hud


def load_scenario(key: str):
    fn = SCENARIOS.get(key, SCENARIOS["1"])
    return fn()


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument(
        "--scenario", "-s",
        help="scenario key (1/2/3)",
        default="1",
    )
    parser.add_argument(
        "--log-level",
        help="logging level (DEBUG shows every subscribe / dispatch)",
        default=config.LOG_LEVEL,
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    pygame.init()
    screen = pygame.display.set_mode((config.SCREEN_W, config.SCREEN_H))
    pygame.display.set_caption("Simplified Event Target")
    clock = pygame.time.Clock()
    font = pygame.font.SysFont("consolas,menlo,monospace", 16)

    world = World(load_scenario(args.scenario))

    running = True
    while running:
        clock.tick(int(1.0 / config.DT))

        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                running = False

            elif e.type == pygame.MOUSEBUTTONDOWN and e.button == 1:
                world.click(screen_to_world(world, *e.pos), pixel=e.pos)

            elif e.type == pygame.KEYDOWN:
                step_px = config.PAN_STEP_M * config.resolution_for_zoom(0)

                if e.key == pygame.K_ESCAPE:
                    running = False

                elif e.key == pygame.K_SPACE:
                    world.paused = not world.paused

                elif e.key in (pygame.K_1, pygame.K_2, pygame.K_3):
                    world.reset(load_scenario(pygame.key.name(e.key)))

                elif e.key == pygame.K_LEFT:
                    world.view.pan(-step_px, 0)
                elif e.key == pygame.K_RIGHT:
                    world.view.pan(step_px, 0)
                elif e.key == pygame.K_UP:
                    world.view.pan(0, step_px)
                elif e.key == pygame.K_DOWN:
                    world.view.pan(0, -step_px)

                elif e.key in (pygame.K_PLUS, pygame.K_EQUALS, pygame.K_KP_PLUS):
                    world.view.set_zoom(world.view.get_zoom() + 1)
                elif e.key in (pygame.K_MINUS, pygame.K_KP_MINUS):
                    world.view.set_zoom(world.view.get_zoom() - 1)

                elif e.key == pygame.K_s:
                    world.toggle_stopper()

                elif e.key == pygame.K_o:
                    world.toggle_once()

        world.step(config.DT)

        render(screen, font, world)
        draw_hud(screen, font, world)

        pygame.display.flip()

    world.close()

    pygame.quit()
    sys.exit(0)


if __name__ == "__main__":
    main()
