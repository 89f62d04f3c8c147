import argparse
import curses
import multiprocessing
import os
import sys
import time

# Add the current directory to sys.path
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

from outbreak.autopilot import AutoPilot, PilotConfig
from outbreak.config import Config
from outbreak.models import Phase
from outbreak.rendering import StateRenderer

MAX_STEPS = 1000  # Safety limit for runs that can never reach the apex


def run_single_game(params=None):
    """
    Runs a single game silently and returns stats.

    Args:
        params (dict, optional): Config and PilotConfig overrides in one dict.

    Returns:
        dict: result ('win'/'loss'), turns (days played), attempts, score.
    """
    params = params or {}
    state = Config(**params).create_state()
    pilot = AutoPilot(state, PilotConfig(**params))

    steps = 0
    while not state.is_over:
        steps += 1
        if steps > MAX_STEPS:
            break
        if not pilot.step():
            break

    return {
        'result': 'win' if state.phase is Phase.WON else 'loss',
        'turns': max(state.day - 1, 0),
        'attempts': state.stats.attempts,
        'score': state.score(),
    }


def run_visual_game(stdscr, params=None, delay=0.3):
    """Runs a single game with visualization."""
    curses.curs_set(0)
    curses.start_color()
    curses.use_default_colors()

    max_y, _ = stdscr.getmaxyx()

    state = Config(**(params or {})).create_state()
    pilot = AutoPilot(state, PilotConfig(**(params or {})))
    renderer = StateRenderer()
    renderer.init_colors()

    steps = 0
    while not state.is_over and steps < MAX_STEPS:
        steps += 1
        message = [f'AutoPilot Action: {pilot.last_action} (Delay: {delay}s)']
        renderer.render(state, stdscr, message)
        time.sleep(delay)

        if not pilot.step():
            message.append('AI Stuck! No valid moves.')
            renderer.render(state, stdscr, message)
            time.sleep(2)
            break

    renderer.render(state, stdscr, [f'AutoPilot Action: {pilot.last_action}'])
    try:
        stdscr.addstr(max_y - 1, 0, "Press any key to exit...")
        stdscr.refresh()
    except curses.error:
        pass
    stdscr.timeout(-1)
    stdscr.getch()


def run_batch_simulation(num_games=100, params=None):
    """Runs a batch of games and prints statistics using multiprocessing."""
    cpu_count = multiprocessing.cpu_count()
    print(f"Running simulation for {num_games} games using {cpu_count} processes...")
    params = params or {}
    if params:
        print(f"Custom Params: {params}")

    # A fixed seed still gives every game its own stream
    jobs = []
    for i in range(num_games):
        job = dict(params)
        if job.get('seed') is not None:
            job['seed'] = int(job['seed']) + i
        jobs.append(job)

    start_time = time.time()
    wins = 0
    total_turns = 0
    total_score = 0
    finished = 0

    try:
        with multiprocessing.Pool() as pool:
            # Use imap_unordered to get results as they finish for the progress bar
            results = pool.imap_unordered(run_single_game, jobs)

            for i, stats in enumerate(results):
                finished += 1
                if stats['result'] == 'win':
                    wins += 1
                total_turns += stats['turns']
                total_score += stats['score']

                # Progress bar
                progress = (i + 1) / num_games
                bar_length = 40
                block = int(round(bar_length * progress))
                text = f"\rProgress: [{'#' * block + '-' * (bar_length - block)}] {i+1}/{num_games}"
                sys.stdout.write(text)
                sys.stdout.flush()

    except KeyboardInterrupt:
        print("\nSimulation interrupted!")

    print("\n")
    elapsed = time.time() - start_time

    win_rate = (wins / finished) * 100 if finished > 0 else 0
    avg_turns = total_turns / finished if finished > 0 else 0
    avg_score = total_score / finished if finished > 0 else 0

    print(f"Simulation Complete in {elapsed:.2f}s")
    print(f"Win Rate: {win_rate:.2f}%")
    print(f"Avg Turns: {avg_turns:.2f}")
    print(f"Avg Score: {avg_score:.2f}")
    print("-" * 30)
    return {'games': finished, 'wins': wins, 'avg_turns': avg_turns, 'avg_score': avg_score}


def build_params(args):
    """Collects the game settings given on the command line."""
    params = {
        'policy': args.policy,
        'virus_strength': args.strength,
        'turn_ceiling': args.ceiling,
        'seed': args.seed,
        'roster_path': args.roster,
    }
    return {key: value for key, value in params.items() if value is not None}


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Outbreak AI Simulation")
    parser.add_argument('--visual', '-v', action='store_true', help='Run in visual mode (curses)')
    parser.add_argument('--games', '-n', type=int, default=100, help='Number of games for batch simulation')
    parser.add_argument('--delay', '-d', type=float, default=0.3, help='Delay between steps in visual mode')
    parser.add_argument('--policy', choices=['level_adjacency', 'contact_graph'], help='Eligibility policy')
    parser.add_argument('--strength', type=float, help='Virus strength multiplier')
    parser.add_argument('--ceiling', type=int, help='Days before a run is exhausted')
    parser.add_argument('--seed', type=int, help='Seed for reproducible runs')
    parser.add_argument('--roster', help='Path to a roster JSON file')

    args = parser.parse_args()
    params = build_params(args)

    if args.visual:
        try:
            curses.wrapper(run_visual_game, params=params, delay=args.delay)
        except Exception as e:
            print(f"Error in visual mode: {e}")
    else:
        run_batch_simulation(num_games=args.games, params=params)
