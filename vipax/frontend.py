"""Interactive pygame frontend.

Usage: ``vipax rom=path/to/game.ch8 [scale=10] [instructions_per_frame=9] ...``
"""

import jax
import pygame

from vipax.config import load_config, quirks_from_config
from vipax.state import create_state
from vipax.emulator import load_rom_file, set_key, sound_active
from vipax.errors import MachineError
from vipax.logging import MachineLogger
from vipax.rendering import create_color_scheme, display_to_rgb
from vipax.runner import run_frame

# Hex keypad laid out on the left of a QWERTY keyboard:
#   1 2 3 C      1 2 3 4
#   4 5 6 D  ->  Q W E R
#   7 8 9 E      A S D F
#   A 0 B F      Z X C V
KEY_MAP = {
    pygame.K_x: 0x0, pygame.K_1: 0x1, pygame.K_2: 0x2, pygame.K_3: 0x3,
    pygame.K_q: 0x4, pygame.K_w: 0x5, pygame.K_e: 0x6, pygame.K_a: 0x7,
    pygame.K_s: 0x8, pygame.K_d: 0x9, pygame.K_z: 0xA, pygame.K_c: 0xB,
    pygame.K_4: 0xC, pygame.K_r: 0xD, pygame.K_f: 0xE, pygame.K_v: 0xF,
}


def draw_overlay_text(surface, text_lines, position, font, text_color=(255, 255, 0), alpha=120):
    """Draw text with semi-transparent background overlay"""
    if not text_lines:
        return

    line_height = font.get_height()
    max_width = max(font.size(line)[0] for line in text_lines)
    overlay = pygame.Surface((max_width + 16, len(text_lines) * line_height + 8))
    overlay.set_alpha(alpha)
    overlay.fill((0, 0, 0))
    surface.blit(overlay, position)

    x, y = position
    for i, line in enumerate(text_lines):
        text_surface = font.render(line, True, text_color)
        surface.blit(text_surface, (x + 8, y + 4 + i * line_height))


def render(screen, display, scale, on_color, off_color):
    frame = display_to_rgb(display, scale, on_color, off_color)
    # surfarray expects (width, height, 3)
    screen.blit(pygame.surfarray.make_surface(frame.swapaxes(0, 1)), (0, 0))


def run_emulator(cfg):
    """Main emulator loop."""
    logger = MachineLogger(log_level=cfg.log_level)
    if cfg.rom is None:
        logger.error("No ROM given, pass rom=path/to/game.ch8")
        return 1

    quirks = quirks_from_config(cfg)
    rng_key = jax.random.PRNGKey(cfg.seed)

    def fresh_state():
        return load_rom_file(create_state(rng_key, quirks), cfg.rom)

    try:
        state = fresh_state()
    except (OSError, MachineError) as e:
        logger.error(f"Could not load {cfg.rom}: {e}")
        return 1
    logger.info(f"Loaded: {cfg.rom}")

    on_color, off_color = create_color_scheme(cfg.color_scheme)
    width, height = state.display.size()
    ipf = cfg.instructions_per_frame

    pygame.init()
    screen = pygame.display.set_mode((width * cfg.scale, height * cfg.scale))
    pygame.display.set_caption("CHIP-8")
    clock = pygame.time.Clock()
    font = pygame.font.Font(None, 24)

    running = True
    paused = False
    logger.info("Controls: ESC=Quit, P=Pause, Backspace=Reset, +/-=Speed")

    while running:
        clock.tick(cfg.fps)

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key == pygame.K_p:
                    paused = not paused
                elif event.key == pygame.K_BACKSPACE:
                    state = fresh_state()
                    paused = False
                    logger.info("Reset")
                elif event.key == pygame.K_EQUALS:
                    ipf = min(100, ipf + 1)
                    logger.info(f"Speed: {ipf} instructions per frame")
                elif event.key == pygame.K_MINUS:
                    ipf = max(1, ipf - 1)
                    logger.info(f"Speed: {ipf} instructions per frame")

        if not paused:
            keyboard = pygame.key.get_pressed()
            for scancode, key in KEY_MAP.items():
                state = set_key(state, key, bool(keyboard[scancode]))

            try:
                state = run_frame(state, ipf)
            except MachineError as e:
                logger.log_machine_error(e, state)
                paused = True

        render(screen, state.display, cfg.scale, on_color, off_color)
        if paused:
            draw_overlay_text(screen, ["PAUSED - P to resume"], (5, 5), font)
        elif sound_active(state):
            draw_overlay_text(screen, ["BEEP"], (5, 5), font, alpha=80)
        pygame.display.flip()

    pygame.quit()
    return 0


def main():
    cfg = load_config(from_cli=True)
    raise SystemExit(run_emulator(cfg))


if __name__ == "__main__":
    main()
