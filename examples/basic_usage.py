"""Basic usage example for Citeswap."""
from citeswap import Citeswap, Config


def main():
    # Initialize Citeswap
    print("Initializing Citeswap...")
    swap = Citeswap(config=Config(output_dir="./example_output"))

    # Example 1: Load the BibTeX export of the Citavi project
    print("\n=== Example 1: Load bibliography ===")
    index = swap.load_bibliography("bib.bib")
    print(f"Loaded {len(index)} entries")
    print(f"Key for 'Die Ökonomie': {index.find_by_title('Die Ökonomie')}")

    # Example 2: Convert a document
    print("\n=== Example 2: Convert document ===")
    result = swap.convert("thesis.docx")

    for part in result.parts:
        print(f"{part.part_name}: {part.citation_count} citations, {part.skipped} skipped")
    print(f"\nOutput: {result.output_path}")
    for part_file in result.part_files.values():
        print(f"  - {part_file}")


if __name__ == "__main__":
    main()
