# main.py
import math
import os
import pygame
from renderer.raytracer import Renderer
from scenes.diorama import build_world, build_lights, build_cycle, build_camera

TEXTURE_DIR = os.path.join(os.path.dirname(__file__), "textures")

class Application:
    def __init__(self, width: int = 400, height: int = 300, window_scale: int = 2,
                 backend: str = "numba", texture_dir: str = TEXTURE_DIR):
        pygame.init()

        self.render_width = width
        self.render_height = height
        self.window_width = width * window_scale
        self.window_height = height * window_scale

        self.screen = pygame.display.set_mode((self.window_width, self.window_height))
        pygame.display.set_caption("Refractor")

        # Movement settings
        self.rotation_speed = math.pi / 10
        self.zoom_speed = 5.0
        self.cycle_speed = 0.2
        self.frame_delay_ms = 16

        self.camera = build_camera()
        self.lights = build_lights()
        self.cycle = build_cycle(self.lights, self.cycle_speed)
        self.last_phase = None

        self.world = build_world(texture_dir if os.path.isdir(texture_dir) else None)
        self.renderer = Renderer(self.render_width, self.render_height, backend=backend)
        self.renderer.update_scene_data(self.world)

        self.clock = pygame.time.Clock()
        self.font = pygame.font.Font(None, 24)
        self.frame_count = 0

        self.key_map = {
            'left': (pygame.K_LEFT, pygame.K_a),
            'right': (pygame.K_RIGHT, pygame.K_d),
            'up': (pygame.K_UP, pygame.K_w),
            'down': (pygame.K_DOWN, pygame.K_s),
            'zoom_in': (pygame.K_q,),
            'zoom_out': (pygame.K_e,),
        }

    def pressed(self, keys, action: str) -> bool:
        return any(keys[key] for key in self.key_map[action])

    def handle_input(self) -> bool:
        """
        Orbit and zoom the camera from the keyboard. Returns True if the
        camera moved.
        """
        keys = pygame.key.get_pressed()
        moved = False
        if self.pressed(keys, 'left'):
            self.camera.orbit(self.rotation_speed, 0.0)
            moved = True
        if self.pressed(keys, 'right'):
            self.camera.orbit(-self.rotation_speed, 0.0)
            moved = True
        if self.pressed(keys, 'up'):
            self.camera.orbit(0.0, -self.rotation_speed)
            moved = True
        if self.pressed(keys, 'down'):
            self.camera.orbit(0.0, self.rotation_speed)
            moved = True
        if self.pressed(keys, 'zoom_in'):
            self.camera.zoom(self.zoom_speed)
            moved = True
        if self.pressed(keys, 'zoom_out'):
            self.camera.zoom(-self.zoom_speed)
            moved = True
        return moved

    def update_lights(self):
        self.cycle.advance()
        phase = self.cycle.phase()
        if phase != self.last_phase:
            print(f"Time of day: {phase}")
            self.last_phase = phase

    def run(self):
        try:
            print("\n=== Initializing Renderer ===")
            print(f"Render resolution: {self.render_width}x{self.render_height}")
            print(f"Backend: {self.renderer.backend}")
            if self.renderer.backend == "numba":
                print("First frame compiles the numba kernels, this can take a while")

            running = True
            while running:
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        running = False
                    elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                        running = False

                self.handle_input()
                self.update_lights()

                render_start = pygame.time.get_ticks()
                framebuffer = self.renderer.render_frame(self.camera, self.world, self.lights)
                render_time = pygame.time.get_ticks() - render_start

                frame_surface = pygame.surfarray.make_surface(framebuffer.to_surface_array())
                if self.render_width != self.window_width or self.render_height != self.window_height:
                    frame_surface = pygame.transform.scale(frame_surface, (self.window_width, self.window_height))
                self.screen.blit(frame_surface, (0, 0))

                text = self.font.render(f"{render_time} ms | {self.last_phase}", True, (255, 255, 255))
                self.screen.blit(text, (10, 10))
                pygame.display.flip()

                self.frame_count += 1
                if self.frame_count % 60 == 0:
                    print(f"Frame {self.frame_count}: {render_time} ms, camera at {self.camera.eye}")
                self.clock.tick(1000 // self.frame_delay_ms)
        finally:
            print("Cleaning up...")
            pygame.quit()

def main():
    app = Application()
    app.run()

if __name__ == "__main__":
    main()
