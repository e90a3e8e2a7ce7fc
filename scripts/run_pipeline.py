#!/usr/bin/env python3
"""
Pipeline Runner Script

Runs one text through the full translation workflow against a running
HCAILT backend, the same sequence the browser client performs:

1. /domain-check - stop unless the text is medical (override with --force)
2. /translate    - Spanish -> technical English
3. /plain        - technical English -> plain English
4. /qe           - quality score of the plain-language text

Usage:
    python scripts/run_pipeline.py --sample medical
    python scripts/run_pipeline.py --file report.txt --provider google --model models/gemini-2.5-flash
    python scripts/run_pipeline.py --sample non-medical --force
    python scripts/run_pipeline.py --base-url https://hcailt-backend.vercel.app/api
"""

import argparse
import asyncio
import sys
import time
from dataclasses import dataclass, field
from pathlib import Path

import httpx

# Add project root to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from hcailt.registry.providers import (
    DEFAULT_TASK_TEMPERATURES,
    ProviderName,
    get_provider_registry,
)

SAMPLE_TEXTS = {
    "medical": (
        "Paciente varón de 67 años con antecedentes de HTA y DM2 que acude por "
        "disnea de esfuerzo y edema maleolar bilateral. Se pauta enalapril 10 mg "
        "cada 12 horas y furosemida 40 mg en ayunas. Control en 2 semanas."
    ),
    "non-medical": (
        "El equipo local ganó el partido del domingo por tres goles a uno y "
        "celebró la victoria con sus aficionados en la plaza mayor."
    ),
}


class PipelineError(Exception):
    """A workflow step returned an error response."""


@dataclass
class StepResult:
    """Outcome of one workflow step."""

    name: str
    latency_ms: float
    data: dict = field(default_factory=dict)


@dataclass
class PipelineResults:
    """All steps run for one text."""

    steps: list[StepResult] = field(default_factory=list)
    stopped_reason: str | None = None

    @property
    def total_latency_ms(self) -> float:
        return sum(s.latency_ms for s in self.steps)


async def call_step(
    client: httpx.AsyncClient, path: str, payload: dict
) -> StepResult:
    """POST one workflow step and time it."""
    start = time.perf_counter()
    response = await client.post(path, json=payload)
    latency_ms = (time.perf_counter() - start) * 1000

    try:
        data = response.json()
    except ValueError:
        data = {"error": response.text}

    if response.status_code != 200:
        raise PipelineError(
            f"{path} returned {response.status_code}: {data.get('error', data)}"
        )
    return StepResult(name=path, latency_ms=latency_ms, data=data)


async def run_pipeline(
    base_url: str,
    text: str,
    provider: str,
    model: str,
    force: bool = False,
    timeout: float = 120.0,
) -> PipelineResults:
    """
    Run domain check, translation, simplification and QE in order.

    Args:
        base_url: Backend URL, including any /api prefix
        text: Spanish source text
        provider: Provider name
        model: Model identifier for that provider
        force: Continue even if the text is not medical
        timeout: Per-request timeout in seconds

    Returns:
        PipelineResults with every completed step
    """
    results = PipelineResults()
    common = {"provider": provider, "model": model}

    async with httpx.AsyncClient(base_url=base_url, timeout=timeout) as client:
        domain = await call_step(
            client, "/domain-check", {**common, "text": text, "temperature": 0}
        )
        results.steps.append(domain)
        if not domain.data.get("isMedical") and not force:
            results.stopped_reason = "text is not medical (use --force to continue)"
            return results

        translation = await call_step(
            client,
            "/translate",
            {
                **common,
                "text": text,
                "temperature": DEFAULT_TASK_TEMPERATURES["translate"],
            },
        )
        results.steps.append(translation)

        plain = await call_step(
            client,
            "/plain",
            {
                **common,
                "originalText": text,
                "translatedText": translation.data["translation"],
                "temperature": DEFAULT_TASK_TEMPERATURES["plain"],
            },
        )
        results.steps.append(plain)

        qe = await call_step(
            client,
            "/qe",
            {
                **common,
                "originalText": text,
                "translatedText": translation.data["translation"],
                "simplifiedText": plain.data["plainText"],
                "temperature": DEFAULT_TASK_TEMPERATURES["qe"],
            },
        )
        results.steps.append(qe)

    return results


def print_report(results: PipelineResults) -> None:
    """Print a formatted report of the pipeline run."""

    print("\n" + "=" * 60)
    print("HCAILT PIPELINE RESULTS")
    print("=" * 60)

    for step in results.steps:
        print(f"\n{step.name} ({step.latency_ms:.0f}ms)")
        print("-" * 60)
        for key, value in step.data.items():
            print(f"  {key}: {value}")

    if results.stopped_reason:
        print(f"\nStopped: {results.stopped_reason}")

    print(f"\nTotal time: {results.total_latency_ms / 1000:.2f}s")
    print("=" * 60)


def main():
    """Main entry point for the pipeline runner."""

    registry = get_provider_registry()

    parser = argparse.ArgumentParser(
        description="Run a text through the HCAILT translation workflow",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--file", help="Read the Spanish text from this file")
    source.add_argument(
        "--sample",
        choices=sorted(SAMPLE_TEXTS),
        help="Use a built-in sample text",
    )
    parser.add_argument(
        "--base-url",
        default="http://localhost:3000",
        help="Backend base URL (default: http://localhost:3000)",
    )
    parser.add_argument(
        "--provider",
        choices=[p.value for p in ProviderName],
        default=ProviderName.OPENAI.value,
        help="LLM provider (default: openai)",
    )
    parser.add_argument(
        "--model",
        help="Model identifier (default: the provider's first suggested model)",
    )
    parser.add_argument(
        "--force",
        action="store_true",
        help="Continue even if the domain check says the text is not medical",
    )

    args = parser.parse_args()

    if args.file:
        try:
            text = Path(args.file).read_text(encoding="utf-8")
        except OSError as e:
            print(f"ERROR: Cannot read {args.file}: {e}")
            sys.exit(1)
    else:
        text = SAMPLE_TEXTS[args.sample]

    model = args.model or registry.get_provider(args.provider).suggested_models[0]

    print(f"Provider: {args.provider}  Model: {model}  Backend: {args.base_url}")

    try:
        results = asyncio.run(
            run_pipeline(args.base_url, text, args.provider, model, force=args.force)
        )
    except (PipelineError, httpx.HTTPError) as e:
        print(f"ERROR: {e}")
        sys.exit(1)

    print_report(results)
    sys.exit(0)


if __name__ == "__main__":
    main()
