# main.py
"""
Main entry point for the particle simulation.

This script orchestrates the entire simulation lifecycle:
1. Loads configuration from `config.json`.
2. Initializes the logging system.
3. Opens the window and seeds the initial particles.
4. Runs the main loop: frame timing -> physics update -> events and drawing.
5. Handles clean shutdown.
"""
import logging
from utils import setup_logging, load_config, config_section
import cProfile
import pstats
import io

def main():
    """
    The main function to run the simulation.
    """
    # Logging is not set up yet, so we use a print for this one error.
    try:
        config = load_config('config.json')
    except Exception as e:
        print(f"FATAL: Could not load config.json. Error: {e}")
        return

    setup_logging(config)

    logging.info("--- Particle Simulation Starting ---")

    try:
        sim_params = config_section(config, 'simulation_parameters')
        run_params = config_section(config, 'run_control')
    except ValueError:
        return

    from constants import WINDOW_WIDTH, WINDOW_HEIGHT
    from simulation import ParticleSystem
    from visualization import Visualizer

    # --- Component Initialization ---
    try:
        particles = ParticleSystem(sim_params, WINDOW_WIDTH, WINDOW_HEIGHT)
    except ValueError:
        logging.critical("Invalid simulation parameters. Aborting.")
        return
    particles.seed_initial()
    # Compile before the window's clock starts, or the first dt is the compile time
    particles.warm_up()
    visualizer = Visualizer(WINDOW_WIDTH, WINDOW_HEIGHT, particles.burst_size)

    log_throttle = run_params.get('log_throttle_steps', 100)
    # 0 means run until the window is closed
    max_steps = run_params.get('max_steps', 0)
    profiler = cProfile.Profile() if run_params.get('profile', False) else None

    running = True
    step_num = 0

    if profiler:
        profiler.enable()
    while running:
        dt = visualizer.tick()
        particles.update(dt)
        step_num += 1

        # The visualizer's draw method also polls events; it returns False
        # if the user quits.
        if not visualizer.draw(particles):
            running = False

        if step_num % log_throttle == 0:
            logging.info(f"Simulation step {step_num} | Particles: {len(particles)}")
            logging.debug(
                f"Step {step_num} | dt: {dt:.4f}s | Average Speed: {particles.average_speed():.4f} "
                f"| Connections: {len(particles.proximity_graph)}"
            )

        if max_steps and step_num >= max_steps:
            logging.info(f"Reached max_steps ({max_steps}). Stopping simulation.")
            running = False
    if profiler:
        profiler.disable()

    visualizer.close()
    logging.info("Simulation loop finished.")

    if profiler:
        logging.info("--- Performance Profile ---")
        s = io.StringIO()
        # Sort by cumulative time spent in the function
        stats = pstats.Stats(profiler, stream=s).sort_stats('cumtime')
        stats.print_stats(20)
        logging.info(f"\n{s.getvalue()}")

    logging.info("--- Particle Simulation Shutting Down ---")


if __name__ == "__main__":
    main()
