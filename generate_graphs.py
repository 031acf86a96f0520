import argparse

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt

from replacement import DEFAULT_SEED, Policy
from simulator import VirtualMemorySimulator
from trace_reader import read_trace

DEFAULT_FRAME_COUNTS = [4, 8, 16, 32, 64, 128]


def run_comparison(records, frame_counts, seed=DEFAULT_SEED):
    """Returns {policy: {frames: Statistics}} for every policy and frame count."""
    results = {}
    for policy in Policy:
        results[policy] = {}
        for frames in frame_counts:
            simulator = VirtualMemorySimulator(num_frames=frames, policy=policy, seed=seed)
            results[policy][frames] = simulator.run_simulation(records)
    return results


def plot_comparison(results, frame_counts, output):
    fig, axes = plt.subplots(1, 2, figsize=(12, 5))
    fig.suptitle('Page Replacement Algorithm Comparison', fontsize=14, fontweight='bold')

    metrics = [('fault_rate', 'Page Fault Rate'), ('disk_writes', 'Disk Writes')]
    for ax, (metric, title) in zip(axes, metrics):
        for policy, by_frames in results.items():
            values = [getattr(by_frames[frames], metric) for frames in frame_counts]
            ax.plot(frame_counts, values, marker='o', label=str(policy))
        ax.set_title(title)
        ax.set_xlabel('Frames')
        ax.set_xscale('log', base=2)
        ax.set_xticks(frame_counts)
        ax.set_xticklabels([str(f) for f in frame_counts])
        ax.grid(alpha=0.3)

    handles, labels = axes[0].get_legend_handles_labels()
    fig.legend(handles, labels, loc='lower center', ncol=len(labels), frameon=True)

    plt.tight_layout()
    plt.subplots_adjust(bottom=0.18)
    plt.savefig(output, dpi=300, bbox_inches='tight')
    plt.close(fig)


def main(argv=None):
    parser = argparse.ArgumentParser(description='Plot page replacement policies against each other.')
    parser.add_argument('tracefile')
    parser.add_argument('-f', '--frames', type=int, nargs='+', default=DEFAULT_FRAME_COUNTS)
    parser.add_argument('-s', '--seed', type=int, default=DEFAULT_SEED)
    parser.add_argument('-o', '--output', default='algorithm_comparison.png')
    args = parser.parse_args(argv)

    records = list(read_trace(args.tracefile))
    frame_counts = sorted(args.frames)

    print("Running simulations...")
    results = run_comparison(records, frame_counts, seed=args.seed)

    print(f"{'Algorithm':<12} {'Frames':<8} {'Page Faults':<12} {'Disk Writes':<12} {'Fault Rate':<10}")
    print("-" * 58)
    for policy, by_frames in results.items():
        for frames in frame_counts:
            stats = by_frames[frames]
            print(f"{str(policy):<12} {frames:<8} {stats.page_faults:<12} "
                  f"{stats.disk_writes:<12} {stats.fault_rate:<10.4f}")

    plot_comparison(results, frame_counts, args.output)
    print(f"\nGraph saved as '{args.output}'")
    return 0


if __name__ == '__main__':
    main()
