"""
Visualization tools for benchmark results.
"""

import os
from typing import Dict

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import seaborn as sns


def results_to_frame(results: Dict) -> pd.DataFrame:
    """
    Flatten benchmark results to one row per lookup.

    Args:
        results: Dictionary of config -> BenchmarkResults

    Returns:
        DataFrame with columns config, m, nodes, hops
    """
    rows = []
    for config_name, result in results.items():
        for hops in result.hop_counts:
            rows.append({
                'config': config_name,
                'm': result.config.get('m'),
                'nodes': result.config.get('nodes'),
                'hops': hops,
            })
    return pd.DataFrame(rows, columns=['config', 'm', 'nodes', 'hops'])


def plot_hop_distribution(results: Dict, output_file: str = "hop_distribution.png"):
    """
    Plot the hop count distribution of each configuration.

    Args:
        results: Dictionary of config -> BenchmarkResults
        output_file: Output filename
    """
    df = results_to_frame(results)

    fig, ax = plt.subplots(figsize=(12, 6))
    sns.boxplot(data=df, x='config', y='hops', ax=ax)

    ax.set_xlabel('Configuration', fontsize=12, fontweight='bold')
    ax.set_ylabel('Peers visited', fontsize=12, fontweight='bold')
    ax.set_title('Lookup Path Length', fontsize=14, fontweight='bold')
    ax.tick_params(axis='x', rotation=45)
    ax.grid(axis='y', alpha=0.3)

    plt.tight_layout()
    plt.savefig(output_file, dpi=150)
    print(f"Saved hop distribution to {output_file}")
    plt.close(fig)


def plot_hops_vs_nodes(results: Dict, output_file: str = "hops_vs_nodes.png"):
    """
    Plot mean hop count against ring population with the log2(N)/2 reference.

    Args:
        results: Dictionary of config -> BenchmarkResults
        output_file: Output filename
    """
    df = results_to_frame(results)
    summary = df.groupby('nodes', as_index=False)['hops'].mean().sort_values('nodes')

    fig, ax = plt.subplots(figsize=(10, 6))
    sns.lineplot(data=summary, x='nodes', y='hops', marker='o',
                 label='Mean peers visited', ax=ax)

    nodes = summary['nodes'].to_numpy(dtype=float)
    if len(nodes):
        ax.plot(nodes, 0.5 * np.log2(np.maximum(nodes, 1)), linestyle='--',
                color='gray', label='0.5 · log2(N)')

    ax.set_xscale('log', base=2)
    ax.set_xlabel('Nodes (N)', fontsize=12, fontweight='bold')
    ax.set_ylabel('Peers visited', fontsize=12, fontweight='bold')
    ax.set_title('Lookup Cost vs. Ring Size', fontsize=14, fontweight='bold')
    ax.legend()
    ax.grid(alpha=0.3)

    plt.tight_layout()
    plt.savefig(output_file, dpi=150)
    print(f"Saved hops vs. nodes to {output_file}")
    plt.close(fig)


def plot_all_results(results: Dict, output_dir: str = "."):
    """
    Generate all plots for benchmark results.

    Args:
        results: Dictionary of config -> BenchmarkResults
        output_dir: Output directory for plots
    """
    print("\nGenerating visualizations...")
    print("=" * 60)

    os.makedirs(output_dir, exist_ok=True)

    plot_hop_distribution(results, os.path.join(output_dir, "hop_distribution.png"))
    plot_hops_vs_nodes(results, os.path.join(output_dir, "hops_vs_nodes.png"))

    print("\nAll visualizations saved!")


if __name__ == "__main__":
    import config
    from evaluation.benchmark import run_benchmarks

    plot_all_results(run_benchmarks(), output_dir=config.PLOT_DIR)
