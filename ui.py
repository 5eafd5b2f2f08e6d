import math
import pygame
from config import (
    W, H, BG, WHITE, GRAY, PLAYER_COLOR, AI_COLOR, BALL_COLOR, NET_COLOR,
    GLOW_RADIUS, NET_DOT_STEP, NET_DOT_R, DURATION_CHOICES_MIN,
)


def format_time(s):
    s = max(0, int(s))
    m, sec = divmod(s, 60)
    return f"{m:02d}:{sec:02d}"


def make_fonts():
    return {
        "hud": pygame.font.SysFont("consolas", 26),
        "small": pygame.font.SysFont("consolas", 18),
        "big": pygame.font.SysFont("consolas", 72),
    }


def glow_rect(surf, color, rect, radius=GLOW_RADIUS, steps=4):
    x, y, w, h = rect
    pad = radius
    g = pygame.Surface((int(w + pad * 2), int(h + pad * 2)), pygame.SRCALPHA)
    for i in range(steps, 0, -1):
        grow = pad * i / steps
        a = int(60 * (1 - i / (steps + 1)))
        r = pygame.Rect(0, 0, int(w + grow * 2), int(h + grow * 2))
        r.center = g.get_rect().center
        pygame.draw.rect(g, (*color[:3], a), r, border_radius=int(grow))
    surf.blit(g, (int(x - pad), int(y - pad)))


def glow_circle(surf, color, center, r, radius=GLOW_RADIUS, steps=4):
    cx, cy = center
    size = int((r + radius) * 2)
    g = pygame.Surface((size, size), pygame.SRCALPHA)
    for i in range(steps, 0, -1):
        a = int(60 * (1 - i / (steps + 1)))
        pygame.draw.circle(g, (*color[:3], a), (size // 2, size // 2), int(r + radius * i / steps))
    surf.blit(g, (int(cx - size / 2), int(cy - size / 2)))


def draw_table(surf):
    surf.fill(BG)
    line = pygame.Surface((4, H), pygame.SRCALPHA)
    line.fill((255, 255, 255, 64))
    surf.blit(line, (W // 2 - 2, 0))

    dots = pygame.Surface((NET_DOT_R * 2, H), pygame.SRCALPHA)
    for i in range(math.ceil(H / NET_DOT_STEP)):
        pygame.draw.circle(dots, NET_COLOR, (NET_DOT_R, i * NET_DOT_STEP + NET_DOT_STEP // 2), NET_DOT_R)
    surf.blit(dots, (W // 2 - NET_DOT_R, 0))


def draw_player(surf, rect):
    glow_rect(surf, PLAYER_COLOR, rect)
    x, y, w, h = rect
    pygame.draw.rect(surf, PLAYER_COLOR, (int(x), int(y), int(w), int(h)))


def draw_ai(surf, rect, rotation):
    x, y, w, h = rect
    pad = GLOW_RADIUS
    body = pygame.Surface((int(w + pad * 2), int(h + pad * 2)), pygame.SRCALPHA)
    glow_rect(body, AI_COLOR, (pad, pad, w, h))
    pygame.draw.rect(body, AI_COLOR, (pad, pad, int(w), int(h)))
    # pygame rotates counter-clockwise in degrees
    turned = pygame.transform.rotate(body, -math.degrees(rotation))
    surf.blit(turned, turned.get_rect(center=(int(x + w / 2), int(y + h / 2))))


def draw_ball(surf, center, r):
    glow_circle(surf, BALL_COLOR, center, r)
    pygame.draw.circle(surf, BALL_COLOR, (int(center[0]), int(center[1])), int(r))


def draw_hud(surf, fonts, hits, time_left, debug_line=None):
    t = fonts["hud"].render(f"Time Left: {format_time(time_left)}", True, WHITE)
    surf.blit(t, (20, 14))
    s = fonts["hud"].render(f"Hits: {hits}", True, WHITE)
    surf.blit(s, s.get_rect(topright=(W - 20, 14)))
    if debug_line:
        d = fonts["small"].render(debug_line, True, GRAY)
        surf.blit(d, (20, H - 28))


def draw_frame(surf, snap, fonts, debug=False):
    draw_table(surf)
    draw_player(surf, snap.player_rect)
    draw_ai(surf, snap.ai_rect, snap.ai_rotation)
    draw_ball(surf, snap.ball_center, snap.ball_radius)
    debug_line = None
    if debug:
        bx, by = snap.ball_center
        debug_line = f"ball=({bx:.0f},{by:.0f}) ai={snap.ai_mode} tilt={math.degrees(snap.ai_rotation):.1f}"
    draw_hud(surf, fonts, snap.hits, snap.time_left, debug_line)


def button(surf, font, rect, text, active=False):
    bg = pygame.Surface((rect.w, rect.h), pygame.SRCALPHA)
    bg.fill((255, 255, 255, 26 if not active else 70))
    surf.blit(bg, rect.topleft)
    pygame.draw.rect(surf, WHITE if active else GRAY, rect, 2, border_radius=12)
    t = font.render(text, True, WHITE if active else (210, 210, 210))
    surf.blit(t, t.get_rect(center=rect.center))


def draw_overlay(surf, big, msg, color):
    panel = pygame.Surface((W, H), pygame.SRCALPHA)
    panel.fill((0, 0, 0, 150))
    surf.blit(panel, (0, 0))
    if msg:
        t = big.render(msg, True, color)
        surf.blit(t, t.get_rect(center=(W // 2, H // 2 - 120)))


def start_layout():
    n = len(DURATION_CHOICES_MIN)
    bw, gap = 110, 16
    x0 = W // 2 - (n * bw + (n - 1) * gap) // 2
    choices = {
        m: pygame.Rect(x0 + i * (bw + gap), H // 2 - 20, bw, 48)
        for i, m in enumerate(DURATION_CHOICES_MIN)
    }
    start = pygame.Rect(W // 2 - 110, H // 2 + 70, 220, 56)
    return choices, start


def end_layout():
    cont = pygame.Rect(W // 2 - 230, H // 2 + 60, 210, 56)
    exit_ = pygame.Rect(W // 2 + 20, H // 2 + 60, 210, 56)
    return cont, exit_


def draw_start_screen(surf, fonts, minutes):
    draw_table(surf)
    draw_overlay(surf, fonts["big"], "PONG", WHITE)
    label = fonts["small"].render("Match length (minutes)", True, GRAY)
    surf.blit(label, label.get_rect(center=(W // 2, H // 2 - 50)))
    choices, start = start_layout()
    for m, r in choices.items():
        button(surf, fonts["hud"], r, str(m), active=(m == minutes))
    button(surf, fonts["hud"], start, "START", active=True)


def draw_end_screen(surf, fonts, final_hits):
    draw_table(surf)
    draw_overlay(surf, fonts["big"], "TIME UP", AI_COLOR)
    t = fonts["hud"].render(f"Final Hits: {final_hits}", True, WHITE)
    surf.blit(t, t.get_rect(center=(W // 2, H // 2 - 10)))
    cont, exit_ = end_layout()
    button(surf, fonts["hud"], cont, "CONTINUE")
    button(surf, fonts["hud"], exit_, "EXIT")
