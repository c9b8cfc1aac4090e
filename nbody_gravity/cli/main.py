"""CLI main entry point."""

import argparse
import sys
from nbody_gravity.io.frame_writer import PPMFrameWriter
from nbody_gravity.io.gif_exporter import GIFExporter
from nbody_gravity.physics.diagnostics import Diagnostics
from nbody_gravity.physics.simulator import Simulator, NumericalInstabilityError
from nbody_gravity.presets.star_disk import StarDiskPreset
from nbody_gravity.render.glow import GlowRenderer
from nbody_gravity.render.scatter import ScatterRenderer
from nbody_gravity.utils.config import SimulationConfig, load_config
from nbody_gravity.utils.reproducibility import set_all_seeds


def positive_int(value: str) -> int:
    """argparse type for counts that must be at least 1."""
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def build_config(args) -> SimulationConfig:
    """Combine the optional config file with command-line overrides."""
    config = load_config(args.config) if args.config else SimulationConfig()
    return config.with_overrides(
        n_bodies=args.bodies,
        n_steps=args.steps,
        render_interval=args.render_interval,
        theta=args.theta,
        workers=args.workers,
        seed=args.seed,
        output_dir=args.output_dir,
        enable_drag=True if args.drag else None,
        debug=True if args.debug else None,
    )


def get_renderer(name: str, config: SimulationConfig, sink):
    """Get renderer by name."""
    renderers = {
        'glow': GlowRenderer,
        'scatter': ScatterRenderer,
    }
    renderer_class = renderers.get(name.lower())
    if renderer_class is None:
        raise ValueError(f"Unknown renderer: {name}. Available: {list(renderers.keys())}")
    return renderer_class(config, sink=sink)


def run_simulation(args) -> int:
    """Run a simulation."""
    config = build_config(args)
    if config.seed is not None:
        set_all_seeds(config.seed)

    preset = StarDiskPreset(config)
    bodies = preset.generate()

    print(f"{config.system_thickness}AU thick disk")
    print(f"Total Disk Mass: {preset.disk_mass:.6e}")
    print(f"Each Particle weight: {config.disk_body_mass:.6e}")
    print("_" * 30)

    renderer = None
    if args.renderer != 'none':
        if args.gif:
            sink = GIFExporter(args.gif, fps=args.fps)
        else:
            sink = PPMFrameWriter(config.output_dir, pipe_path=args.pipe)
        renderer = get_renderer(args.renderer, config, sink)

    sim = Simulator(bodies, config, renderer=renderer)
    sim.set_profiling(config.debug)

    def report(s: Simulator):
        print(f"[Step] {s.step_count}/{config.n_steps} rendered={s.frames_rendered}")
        if config.debug:
            timing = s.get_timing()
            print("[Time] " + " ".join(f"{k}={v:.1f}" for k, v in timing.items()))

    sim.on_step_callback = report

    try:
        sim.run(config.n_steps)
    except NumericalInstabilityError as exc:
        print(f"Simulation diverged: {exc}", file=sys.stderr)
        return 1
    finally:
        sim.close()

    diagnostics = Diagnostics(bodies)
    print(f"Kinetic energy: {diagnostics.kinetic_energy():.6e} J")
    print("Simulation complete!")
    return 0


def main(argv=None) -> int:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="nbody-gravity - Barnes-Hut simulation of a star with a particle disk"
    )

    parser.add_argument('--config', type=str, default=None,
                        help='Configuration file (.json or .yaml)')
    parser.add_argument('--bodies', type=int, default=None,
                        help='Number of bodies including the central star')
    parser.add_argument('--steps', type=int, default=None,
                        help='Number of simulation steps')
    parser.add_argument('--theta', type=float, default=None,
                        help='Barnes-Hut opening angle (smaller is more exact)')
    parser.add_argument('--workers', type=int, default=None,
                        help='Worker threads (default: CPU count)')
    parser.add_argument('--seed', type=int, default=None,
                        help='Random seed for the initial disk')
    parser.add_argument('--drag', action='store_true',
                        help='Enable the experimental velocity drag between close bodies')
    parser.add_argument('--debug', action='store_true',
                        help='Print per-step diagnostics and timings')

    # Rendering
    parser.add_argument('--renderer', type=str, default='glow',
                        choices=['glow', 'scatter', 'none'],
                        help='Frame renderer')
    parser.add_argument('--render-interval', type=int, default=None,
                        help='Render every N steps')
    parser.add_argument('--output-dir', type=str, default=None,
                        help='Directory for PPM frames')
    parser.add_argument('-p', '--pipe', type=str, default=None, metavar='FIFO',
                        help='Write PPM frames to a named pipe instead of files (for ffmpeg)')
    parser.add_argument('--gif', type=str, default=None,
                        help='Collect frames into an animated GIF at this path '
                             '(frames stay in memory until the run ends; raise '
                             '--render-interval for long runs)')
    parser.add_argument('--fps', type=positive_int, default=30,
                        help='Frames per second for GIF export')

    args = parser.parse_args(argv)

    try:
        return run_simulation(args)
    except OSError as exc:
        print(f"{exc.filename or 'output'}: {exc.strerror or exc}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
