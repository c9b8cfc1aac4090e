"""Basic example of using the Barnes-Hut simulator."""

from nbody_gravity import SimulationConfig, Simulator
from nbody_gravity.physics.diagnostics import Diagnostics
from nbody_gravity.presets import StarDiskPreset

def main():
    """Run a small star-and-disk simulation without rendering."""
    config = SimulationConfig(n_bodies=2048, n_steps=200, theta=0.75, seed=42)
    
    # Generate initial conditions
    bodies = StarDiskPreset(config).generate()
    diagnostics = Diagnostics(bodies)
    
    print("Running simulation...")
    print(f"Initial kinetic energy: {diagnostics.kinetic_energy():.6e}")
    
    with Simulator(bodies, config) as sim:
        for step in range(config.n_steps):
            sim.step()
            if step % 50 == 0:
                above, below = diagnostics.mass_balance()
                print(f"Step {step}: nodes={sim.last_tree_nodes}, "
                      f"depth={sim.last_tree_depth}, below/above={below / above:.4f}")
    
    print(f"Final kinetic energy: {diagnostics.kinetic_energy():.6e}")
    print("Simulation complete!")

if __name__ == "__main__":
    main()
