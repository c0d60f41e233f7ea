import logging

import pygame

logger = logging.getLogger(__name__)


class Scene:
    """Base scene with no-op event/update/draw hooks."""

    def __init__(self, manager):
        self.manager = manager

    def handle_event(self, event):
        pass

    def update(self, dt):
        pass

    def draw(self):
        pass


class SceneManager:
    """Owns the window, the scene stack and the frame loop."""

    def __init__(self, first_scene_factory, size=(960, 540), caption="Needle Stop", fps=60):
        pygame.init()
        self.screen = pygame.display.set_mode(size)
        self.size = self.screen.get_size()
        pygame.display.set_caption(caption)
        self.clock = pygame.time.Clock()
        self.fps = fps
        self.running = True
        self.scenes = []

        if not callable(first_scene_factory):
            raise ValueError("First scene must be a class or factory taking the manager.")
        self.scenes.append(first_scene_factory(self))

    def push(self, scene):
        self.scenes.append(scene)

    def pop(self):
        if self.scenes:
            self.scenes.pop()
        if not self.scenes:
            self.running = False

    def switch(self, scene):
        if self.scenes:
            self.scenes.pop()
        self.push(scene)

    def run(self):
        """Main loop. Returns once the last scene is popped or the window closes."""
        while self.running:
            dt = self.clock.tick(self.fps) / 1000.0
            if not self.scenes:
                break
            current = self.scenes[-1]

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self.running = False
                    break
                try:
                    current.handle_event(event)
                except Exception:
                    logger.exception("Event handler failed in %s", type(current).__name__)

            if not self.running or current is not (self.scenes[-1] if self.scenes else None):
                continue

            try:
                current.update(dt)
                current.draw()
            except Exception:
                logger.exception("Frame failed in %s", type(current).__name__)

            pygame.display.flip()

        pygame.quit()
