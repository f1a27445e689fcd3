# main.py
"""
Main entry point for the Particle Ring application.

This script orchestrates the entire application lifecycle:
1. Loads configuration from `config.json`.
2. Initializes the logging system.
3. Opens the window and lays out the particle ring.
4. Runs the main loop, one simulation tick per frame.
5. Handles clean shutdown.
"""
import logging
from utils import setup_logging, load_config
import cProfile
import pstats
import io

def run(sim, visualizer, run_params) -> int:
    """
    Runs frames until the window closes or max_steps is reached.

    Returns the number of steps executed.
    """
    # 0 or below disables the periodic step log
    log_throttle = run_params.get('log_throttle_steps', 300)
    # 0 means run until the window is closed
    max_steps = run_params.get('max_steps', 0)

    running = True
    while running:
        sim.step()

        # The visualizer's draw method processes input events and returns
        # False once the user quits.
        if not visualizer.draw(sim):
            running = False

        if log_throttle > 0 and sim.step_count % log_throttle == 0:
            logging.info(f"Simulation step {sim.step_count}")
            logging.debug(
                f"Step {sim.step_count} | Particles: {len(sim.field)} | "
                f"Average Speed: {sim.field.average_speed():.4f}"
            )

        if max_steps and sim.step_count >= max_steps:
            logging.info(f"Reached max_steps ({max_steps}). Stopping simulation.")
            running = False

    return sim.step_count

def main():
    """
    The main function to run the application.
    """
    # Logging is not set up yet, so we use a print for this one error.
    try:
        config = load_config('config.json')
    except Exception as e:
        print(f"FATAL: Could not load config.json. Error: {e}")
        return

    setup_logging(config)

    logging.info("--- Particle Ring Starting ---")

    sim_params = config.get('simulation_parameters', {})
    run_params = config.get('run_control', {})
    vis_params = config.get('visualization', {})

    from particle import ParticleField
    from simulation import Simulation
    from visualization import Visualizer

    # --- Component Initialization ---
    # 1. The visualizer opens the window and so determines the viewport.
    visualizer = Visualizer(vis_params)
    width, height = visualizer.size

    # 2. Lay out the ring for that viewport and wrap it in the frame driver.
    field = ParticleField(sim_params, width, height)
    sim = Simulation(field, sim_params, width, height)

    profiler = cProfile.Profile() if run_params.get('profile', False) else None

    if profiler is not None:
        profiler.enable()
    try:
        run(sim, visualizer, run_params)
    finally:
        if profiler is not None:
            profiler.disable()
        visualizer.close()
    logging.info("Simulation loop finished.")

    if profiler is not None:
        logging.info("--- Performance Profile ---")
        s = io.StringIO()
        # Sort by cumulative time spent in the function
        stats = pstats.Stats(profiler, stream=s).sort_stats('cumtime')
        stats.print_stats(20)
        logging.info(f"\n{s.getvalue()}")

    logging.info("--- Particle Ring Shutting Down ---")


if __name__ == "__main__":
    main()
