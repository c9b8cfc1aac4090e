"""Render a short run to an animated GIF."""

from nbody_gravity import SimulationConfig, Simulator
from nbody_gravity.io import GIFExporter
from nbody_gravity.presets import StarDiskPreset
from nbody_gravity.render import GlowRenderer

def main():
    config = SimulationConfig(n_bodies=4096, n_steps=60, render_interval=2, width=512, height=512)
    bodies = StarDiskPreset(config).generate()
    
    renderer = GlowRenderer(config, sink=GIFExporter("disk.gif", fps=15))
    with Simulator(bodies, config, renderer=renderer) as sim:
        sim.run()
        print(f"Rendered {sim.frames_rendered} frames to disk.gif")

if __name__ == "__main__":
    main()
