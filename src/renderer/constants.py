# renderer/constants.py
import math

# Deepest recursion level that is still shaded; deeper rays see the sky.
MAX_DEPTH = 3

# Background color, linear RGB.
SKYBOX_RGB = (68 / 255, 142 / 255, 228 / 255)

# Vertical field of view of the primary rays.
FOV = math.pi / 3.0
