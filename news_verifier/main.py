"""Main script for running the news verifier interactively."""

import asyncio

from .domain.models.analysis_result import AnalysisResult
from .infrastructure.dependencies import get_service_container


def print_result(result: AnalysisResult) -> None:
    """Print an analysis result to the console."""
    print("\nResults:")
    print(f"Overall Score: {result.overall_score}/100")
    print(f"Credibility: {result.credibility_level.value}")

    print("\nClaims:")
    for claim in result.claims:
        print(f"- [{claim.status.value}, {claim.confidence}%] {claim.text}")
        print(f"  {claim.explanation}")

    if result.fact_corrections:
        print("\nFact Corrections:")
        for claim in result.fact_corrections:
            print(f"- {claim.text}")
            print(f"  Correct information: {claim.correct_information}")

    print("\nReferences:")
    for i, reference in enumerate(result.references, 1):
        print(f"{i}. {reference.title} ({reference.source}) - {reference.url} [{reference.reliability.value}]")

    print(f"\nSummary: {result.summary}")


async def main():
    """Run the news verifier."""
    print("News Verifier - simulated news authenticity checks")
    print("--------------------------------------------------")

    container = get_service_container()
    service = container.get_analysis_service()

    try:
        while True:
            # Get article from user
            article = input("\nPaste an article to verify (or 'quit' to exit): ")
            if article.lower() in ('quit', 'exit', 'q'):
                break
            if not article.strip():
                continue

            print("\nAnalyzing article...")
            try:
                result = await service.analyze(article)
                print_result(result)
            except Exception as e:
                print(f"\nError analyzing article: {e}")

    finally:
        # Clean up
        await container.shutdown()


def run() -> None:
    """Console script entry point."""
    asyncio.run(main())


if __name__ == "__main__":
    run()
