import math

import pygame

BACKGROUND = (10, 15, 30)
TEXT = (255, 255, 255)
SCORE_TEXT = (255, 220, 150)
BUTTON_FILL = (60, 100, 150)
BUTTON_HOVER = (80, 130, 180)
HEALTH_BAR = (100, 200, 100)
HEALTH_BAR_BG = (60, 60, 60)
POTATO = (200, 150, 100)
POTATO_SPOT = (150, 100, 50)
LIFE_ICON = (200, 100, 50)

HELP_LINES = [
    "Arrow keys or WASD to move",
    "Space or left mouse button to shoot",
    "Esc / P pauses, H opens this help, M mutes",
    "",
    "Red blobs drift around, blue shooters fire back,",
    "purple bombers dive at you, green zigzags weave.",
    "Destroyed enemies may drop powerups:",
    "triple shot, shield, speed boost, health, extra life.",
    "A shield bounces collisions back onto enemies.",
]


def _rotated(points, angle, cx, cy):
    c, s = math.cos(angle), math.sin(angle)
    return [(cx + x * c - y * s, cy + x * s + y * c) for x, y in points]


class Renderer:
    """Draws a FrameSnapshot. Holds fonts and scratch surfaces only; all game
    state comes from the snapshot.
    """
    def __init__(self, screen):
        self.screen = screen
        self.font = pygame.font.Font(None, 32)
        self.small_font = pygame.font.Font(None, 22)
        self.large_font = pygame.font.Font(None, 84)
        self.frame_surface = None

    def _canvas(self, width, height):
        if self.frame_surface is None or self.frame_surface.get_size() != (width, height):
            self.frame_surface = pygame.Surface((width, height))
        return self.frame_surface

    def draw(self, snap, offset=(0, 0)):
        surf = self._canvas(snap.width, snap.height)
        surf.fill(BACKGROUND)
        self.draw_stars(surf, snap)

        if snap.state in ('PLAYING', 'PAUSED', 'HELP'):
            self.draw_world(surf, snap)
            self.draw_hud(surf, snap)

        if snap.state == 'START':
            self.draw_start(surf, snap)
        elif snap.state == 'PAUSED':
            self.draw_overlay(surf, snap, "PAUSED", ["Press ESC to resume"])
        elif snap.state == 'HELP':
            self.draw_overlay(surf, snap, "HOW TO PLAY", HELP_LINES, title_y=snap.height // 6)
        elif snap.state == 'NAME_ENTRY':
            self.draw_name_entry(surf, snap)
        elif snap.state == 'GAME_OVER':
            self.draw_game_over(surf, snap)

        self.draw_buttons(surf, snap)
        self.draw_messages(surf, snap)
        if snap.show_high_scores:
            self.draw_high_scores(surf, snap)

        self.screen.fill(BACKGROUND)
        self.screen.blit(surf, (int(offset[0]), int(offset[1])))

    # ------------------------------------------------------------------
    # world

    def draw_stars(self, surf, snap):
        for x, y, size in snap.stars:
            pygame.draw.circle(surf, TEXT, (int(x), int(y)), max(1, int(size / 2)))

    def draw_world(self, surf, snap):
        for p in snap.powerups:
            self.draw_powerup(surf, p)
        for p in snap.projectiles:
            self.draw_projectile(surf, p)
        for e in snap.enemies:
            self.draw_enemy(surf, e)
        for s in snap.enemy_projectiles:
            pygame.draw.circle(surf, s.color, (int(s.x), int(s.y)), int(s.size / 2))
            pygame.draw.circle(surf, (255, 255, 255), (int(s.x), int(s.y)), max(1, int(s.size * 0.3)))
        self.draw_player(surf, snap)
        for p in snap.particles:
            self.draw_particle(surf, p)

    def draw_player(self, surf, snap):
        p = snap.player
        cx, cy, size = int(p.x), int(p.y), p.size
        if p.speed > 0.5:
            flame = size * 0.5 * (1.25 + 0.25 * math.sin(p.thrust))
            pygame.draw.ellipse(surf, (255, 100, 50),
                                (cx - size * 0.25, cy + size * 0.6 - flame / 2, size * 0.5, flame))
        # lumpy potato outline
        body = [(math.cos(a / 10.0) * size * (0.45 + 0.03 * math.sin(a * 0.9)),
                 math.sin(a / 10.0) * size * (0.55 + 0.03 * math.cos(a * 1.3)))
                for a in range(63)]
        pygame.draw.polygon(surf, POTATO, _rotated(body, p.angle, cx, cy))
        for ox, oy, r in ((-0.3, 0.1, 0.09), (0.2, -0.2, 0.1), (0.1, 0.3, 0.08)):
            pygame.draw.circle(surf, POTATO_SPOT, (int(cx + ox * size), int(cy + oy * size)), int(r * size))
        for ox in (-0.15, 0.15):
            pygame.draw.circle(surf, (255, 255, 255), (int(cx + ox * size), int(cy - 0.1 * size)), int(size * 0.11))
            pygame.draw.circle(surf, (0, 0, 0), (int(cx + ox * size), int(cy - 0.1 * size)), int(size * 0.05))
        if p.shielded:
            r = int(size + math.sin(snap.frame * 0.05) * 3)
            pygame.draw.circle(surf, (100, 150, 255), (cx, cy), r, width=3)
        elif p.invulnerable and snap.frame % 4 < 2:
            flash = pygame.Surface((size * 2, size * 2), pygame.SRCALPHA)
            pygame.draw.circle(flash, (255, 255, 255, 100), (size, size), size)
            surf.blit(flash, (cx - size, cy - size))

    def draw_enemy(self, surf, e):
        cx, cy = int(e.x), int(e.y)
        size = e.size * (1 + e.phase)
        if e.kind == 'basic':
            pygame.draw.circle(surf, e.color, (cx, cy), int(size / 2))
            pygame.draw.circle(surf, (230, 140, 140), (cx, cy), int(size * 0.35))
            eye = size * 0.2
            for sx in (-1, 1):
                pygame.draw.circle(surf, (255, 255, 255), (int(cx + sx * eye), int(cy - eye)), int(size * 0.12))
                pygame.draw.circle(surf, (0, 0, 0), (int(cx + sx * eye), int(cy - eye)), int(size * 0.05))
        elif e.kind == 'shooter':
            tri = [(-size / 2, size / 2), (size / 2, size / 2), (0, -size / 2)]
            pygame.draw.polygon(surf, e.color, _rotated(tri, e.rotation, cx, cy))
            barrel = [(-size * 0.15, 0), (size * 0.15, 0), (size * 0.15, size * 0.6), (-size * 0.15, size * 0.6)]
            pygame.draw.polygon(surf, tuple(int(c * 0.7) for c in e.color), _rotated(barrel, e.rotation, cx, cy))
        elif e.kind == 'bomber':
            pts = []
            for i in range(8):
                ang = i * math.pi / 4
                r = size / 2 + math.sin(e.rotation * 5 + ang * 2) * 4
                pts.append((math.cos(ang) * r, math.sin(ang) * r))
            pygame.draw.polygon(surf, e.color, _rotated(pts, e.rotation, cx, cy))
            pygame.draw.circle(surf, (255, 150, 0), (cx, cy), int(size * 0.2))
        else:
            dart = [(size * 0.6, 0), (-size * 0.3, size * 0.4), (-size * 0.5, 0), (-size * 0.3, -size * 0.4)]
            pygame.draw.polygon(surf, e.color, _rotated(dart, math.radians(e.heading), cx, cy))
        if e.max_health > 1:
            bar_w = int(e.size)
            bx, by = cx - bar_w // 2, int(cy - e.size / 2 - 10)
            pygame.draw.rect(surf, (30, 30, 30), (bx, by, bar_w, 5), border_radius=3)
            fill_w = max(0, int(e.health / e.max_health * bar_w))
            pygame.draw.rect(surf, e.color, (bx, by, fill_w, 5), border_radius=3)

    def draw_projectile(self, surf, p):
        length, width = p.phase, p.size * 0.4
        fry = [(-width / 2, -length / 2), (width / 2, -length / 2), (width / 2, length / 2), (-width / 2, length / 2)]
        pygame.draw.polygon(surf, p.color, _rotated(fry, p.rotation, p.x, p.y))
        tip = [(-width / 2, -length / 2), (width / 2, -length / 2), (width / 2, -length / 3), (-width / 2, -length / 3)]
        pygame.draw.polygon(surf, (200, 150, 50), _rotated(tip, p.rotation, p.x, p.y))

    def draw_powerup(self, surf, p):
        size = p.size * (1 + p.phase)
        glow = pygame.Surface((int(size * 3), int(size * 3)), pygame.SRCALPHA)
        pygame.draw.circle(glow, (*p.color, 60), (int(size * 1.5), int(size * 1.5)), int(size * 0.75 * 1.5))
        surf.blit(glow, (p.x - size * 1.5, p.y - size * 1.5))
        pygame.draw.circle(surf, p.color, (int(p.x), int(p.y)), int(size / 2))
        letter = {'triple_shot': '3', 'power_shot': 'P', 'shield': 'S', 'speed_boost': 'V',
                  'health': '+', 'extra_life': '1UP'}.get(p.kind, '?')
        txt = self.small_font.render(letter, True, (30, 30, 30))
        surf.blit(txt, txt.get_rect(center=(int(p.x), int(p.y))))

    def draw_particle(self, surf, p):
        r = int(p.size / 2)
        if r < 1 or p.alpha <= 0:
            return
        dot = pygame.Surface((r * 2, r * 2), pygame.SRCALPHA)
        pygame.draw.circle(dot, (*p.color[:3], max(0, min(255, p.alpha))), (r, r), r)
        surf.blit(dot, (p.x - r, p.y - r))

    # ------------------------------------------------------------------
    # HUD and screens

    def draw_hud(self, surf, snap):
        score = self.font.render(f"Score: {snap.score}", True, SCORE_TEXT)
        surf.blit(score, (20, 20))
        level = self.font.render(f"Level {snap.level}", True, SCORE_TEXT)
        surf.blit(level, (snap.width // 2 - level.get_width() // 2, 20))

        p = snap.player
        bar_w, bar_h = 200, 15
        x, y = snap.width - bar_w - 20, 20
        pygame.draw.rect(surf, HEALTH_BAR_BG, (x, y, bar_w, bar_h), border_radius=5)
        ratio = p.health / p.max_health if p.max_health else 0
        pygame.draw.rect(surf, HEALTH_BAR, (x, y, int(bar_w * ratio), bar_h), border_radius=5)
        for i in range(p.lives):
            pygame.draw.circle(surf, LIFE_ICON, (snap.width - 30 - i * 25, y + bar_h + 15), 7)

        # active powerups with remaining time, bottom-left
        for i, (label, remaining, total) in enumerate(p.powerups):
            iy = snap.height - 40 - i * 28
            pygame.draw.rect(surf, (18, 18, 22), (16, iy, 260, 22), border_radius=6)
            surf.blit(self.small_font.render(label, True, (240, 240, 240)), (24, iy + 4))
            ratio = max(0.0, min(1.0, remaining / float(total))) if total else 0.0
            pygame.draw.rect(surf, (40, 40, 48), (130, iy + 4, 100, 14), border_radius=6)
            pygame.draw.rect(surf, (120, 200, 255), (132, iy + 6, int(96 * ratio), 10), border_radius=6)
            surf.blit(self.small_font.render(f"{remaining / 60.0:.1f}s", True, (220, 220, 220)), (236, iy + 4))

        if snap.level_up_timer > 0:
            alpha = min(255, snap.level_up_timer * 4)
            banner = self.large_font.render(f"LEVEL {snap.level}", True, SCORE_TEXT)
            banner.set_alpha(alpha)
            surf.blit(banner, banner.get_rect(center=(snap.width // 2, snap.height // 3)))

    def draw_title(self, surf, text, width, y):
        title = self.large_font.render(text, True, TEXT)
        surf.blit(title, title.get_rect(center=(width // 2, y)))

    def draw_lines(self, surf, lines, width, y, font=None):
        font = font or self.small_font
        for i, line in enumerate(lines):
            txt = font.render(line, True, TEXT)
            surf.blit(txt, txt.get_rect(center=(width // 2, y + i * 26)))

    def draw_start(self, surf, snap):
        self.draw_title(surf, "SPACE POTATO", snap.width, snap.height // 3)
        self.draw_lines(surf, ["Arrow keys or WASD to move. Space or left mouse button to shoot."],
                        snap.width, snap.height // 2)
        if snap.best_score:
            self.draw_lines(surf, [f"High Score: {snap.best_score}"], snap.width, snap.height // 2 + 30)

    def draw_overlay(self, surf, snap, title, lines, title_y=None):
        shade = pygame.Surface((snap.width, snap.height), pygame.SRCALPHA)
        shade.fill((0, 0, 0, 150))
        surf.blit(shade, (0, 0))
        self.draw_title(surf, title, snap.width, title_y or snap.height // 3)
        self.draw_lines(surf, lines, snap.width, (title_y or snap.height // 3) + 70)

    def draw_name_entry(self, surf, snap):
        self.draw_title(surf, "NEW HIGH SCORE", snap.width, snap.height // 4)
        self.draw_lines(surf, [f"Score: {snap.score}", "Type your name and press Enter"],
                        snap.width, snap.height // 4 + 60, self.font)
        box = pygame.Rect(snap.width // 2 - 150, snap.height // 2 - 10, 300, 44)
        pygame.draw.rect(surf, (22, 22, 26), box, border_radius=8)
        pygame.draw.rect(surf, BUTTON_HOVER, box, width=2, border_radius=8)
        cursor = "_" if (snap.frame // 30) % 2 == 0 else " "
        txt = self.font.render(snap.name_input + cursor, True, TEXT)
        surf.blit(txt, txt.get_rect(center=box.center))

    def draw_game_over(self, surf, snap):
        self.draw_title(surf, "GAME OVER", snap.width, snap.height // 3)
        line = f"Score: {snap.score}"
        if snap.new_high:
            line += " - NEW HIGH SCORE!"
        elif snap.last_rank:
            line += f" - Rank #{snap.last_rank}"
        else:
            line += f" - High Score: {snap.best_score}"
        self.draw_lines(surf, [line], snap.width, snap.height // 2, self.font)

    def draw_buttons(self, surf, snap):
        for b in snap.buttons:
            rect = pygame.Rect(b.rect)
            pygame.draw.rect(surf, BUTTON_HOVER if b.hovered else BUTTON_FILL, rect, border_radius=10)
            txt = self.font.render(b.label, True, TEXT)
            surf.blit(txt, txt.get_rect(center=rect.center))

    def draw_messages(self, surf, snap):
        for i, (text, color, alpha) in enumerate(snap.messages):
            box_w, box_h = 280, 32
            box = pygame.Surface((box_w, box_h), pygame.SRCALPHA)
            box.fill((12, 12, 16, int(220 * alpha / 255.0)))
            pygame.draw.rect(box, (*color, alpha), (8, 6, 20, 20), border_radius=6)
            txt = self.small_font.render(text, True, (240, 240, 240))
            txt.set_alpha(alpha)
            box.blit(txt, (40, 8))
            surf.blit(box, (snap.width // 2 - box_w // 2, 60 + i * (box_h + 6)))

    def draw_high_scores(self, surf, snap):
        panel = pygame.Rect(snap.width // 2 - 220, 40, 440, 60 + 28 * max(1, len(snap.high_scores)))
        pygame.draw.rect(surf, (18, 18, 28), panel, border_radius=10)
        pygame.draw.rect(surf, BUTTON_FILL, panel, width=2, border_radius=10)
        head = self.font.render("HIGH SCORES", True, SCORE_TEXT)
        surf.blit(head, head.get_rect(center=(panel.centerx, panel.y + 24)))
        if not snap.high_scores:
            self.draw_lines(surf, ["No scores yet"], snap.width, panel.y + 60)
            return
        for i, (name, score, level, date) in enumerate(snap.high_scores):
            row = f"{i + 1:>2}. {name:<12} {score:>8}  L{level:<2} {date}"
            txt = self.small_font.render(row, True, TEXT)
            surf.blit(txt, (panel.x + 24, panel.y + 48 + i * 28))
