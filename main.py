import logging
import random
import pygame

from config import W, H, PADDLE_H, TICK_MS, FPS_CAP, DEBUG, DEFAULT_MINUTES
from session import Session
from ui import make_fonts, draw_frame, draw_start_screen, draw_end_screen, start_layout, end_layout

logger = logging.getLogger(__name__)

TICK_EVENT = pygame.USEREVENT + 1


def setup_logging(debug=False):
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


class App:
    def __init__(self, screen, rng=None):
        self.screen = screen
        self.fonts = make_fonts()
        self.clock = pygame.time.Clock()
        self.minutes = DEFAULT_MINUTES
        self.screen_state = "START"
        self.final_hits = 0
        self.session = Session(
            rng=rng or random.Random(),
            on_tick=self.handle_tick,
            on_ended=self.handle_ended,
        )

    def start_game(self):
        self.session.start(self.minutes * 60, now_ms=pygame.time.get_ticks())
        pygame.time.set_timer(TICK_EVENT, TICK_MS)
        self.screen_state = "GAME"

    def stop_timer(self):
        pygame.time.set_timer(TICK_EVENT, 0)

    def handle_tick(self, seconds_left):
        logger.debug("Time left: %ss", seconds_left)

    def handle_ended(self, final_hits):
        self.stop_timer()
        self.final_hits = final_hits
        self.screen_state = "END"

    def back_to_start(self):
        self.session.acknowledge()
        self.screen_state = "START"

    def on_click(self, pos):
        if self.screen_state == "START":
            choices, start = start_layout()
            for m, r in choices.items():
                if r.collidepoint(pos):
                    self.minutes = m
                    return
            if start.collidepoint(pos):
                self.start_game()
        elif self.screen_state == "END":
            cont, exit_ = end_layout()
            if cont.collidepoint(pos) or exit_.collidepoint(pos):
                self.back_to_start()

    def handle_event(self, e):
        if e.type == pygame.QUIT:
            return False
        if e.type == pygame.KEYDOWN and e.key == pygame.K_ESCAPE:
            return False
        if e.type == TICK_EVENT:
            self.session.tick_second()
        elif e.type == pygame.MOUSEMOTION and self.screen_state == "GAME":
            self.session.set_player_target(e.pos[1] - PADDLE_H / 2)
        elif e.type == pygame.MOUSEBUTTONDOWN and e.button == 1:
            self.on_click(e.pos)
        return True

    def draw(self):
        if self.screen_state == "GAME":
            draw_frame(self.screen, self.session.snapshot(), self.fonts, debug=DEBUG)
        elif self.screen_state == "END":
            draw_end_screen(self.screen, self.fonts, self.final_hits)
        else:
            draw_start_screen(self.screen, self.fonts, self.minutes)

    def run(self):
        running = True
        while running:
            self.clock.tick(FPS_CAP)
            for e in pygame.event.get():
                if not self.handle_event(e):
                    running = False
                    break
            if not running:
                break
            if self.screen_state == "GAME":
                self.session.frame(pygame.time.get_ticks())
            self.draw()
            pygame.display.flip()
        self.stop_timer()


def main():
    setup_logging(DEBUG)
    pygame.init()
    try:
        screen = pygame.display.set_mode((W, H))
        pygame.display.set_caption("Pong")
        logger.info("Pong starting (%dx%d, fps cap %d)", W, H, FPS_CAP)
        App(screen).run()
    except Exception:
        logger.exception("Fatal error")
        raise
    finally:
        pygame.quit()
    logger.info("Pong stopped")


if __name__ == "__main__":
    main()
