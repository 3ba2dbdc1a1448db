import sys
import argparse
import logging
import traceback
from typing import Iterator, List, Optional, TextIO

from simulator.parser import Parser, ParserException, collect_program
from simulator.asm import InstructionException
from simulator.asm.formatters import TraceFormatter, StateFormatter, ListingFormatter
from simulator.cpu import Cpu, ExecutionException

logger = logging.getLogger(__name__)


def read_console(stdin: TextIO, out: TextIO) -> Iterator[str]:
    """Prompts for instructions line by line until the input runs out."""
    print("Enter instructions (type 'end' to finish):", file=out)
    while True:
        print("Instruction: ", end="", file=out, flush=True)
        line = stdin.readline()
        if not line:
            return
        yield line


def write_listing(source: str, output_lst: str):
    """Writes the encoded listing of source. Parse errors report source line numbers."""
    instructions = Parser(source).parse_program()
    with open(output_lst, 'w', encoding='utf-8') as f:
        formatter = ListingFormatter(f)
        for instr in instructions:
            formatter.visit(instr, instr.encode())


def simulate(program: List[str], out: TextIO, trace: bool = True) -> Cpu:
    """Runs a collected program and prints its trace and final state."""
    cpu = Cpu()
    cpu.execute(program, TraceFormatter(out) if trace else None)
    print("\nExecution complete.", file=out)
    StateFormatter(out).write(cpu)
    return cpu


def simulate_file(input_filename: Optional[str], trace: bool = True, output_lst: Optional[str] = None,
                  stdin: Optional[TextIO] = None, out: Optional[TextIO] = None) -> int:
    """Simulates a program file, or the console input when no file is given. Returns the exit status."""
    stdin = stdin if stdin is not None else sys.stdin
    out = out if out is not None else sys.stdout
    try:
        if input_filename:
            logger.info("Reading %s", input_filename)
            with open(input_filename, 'r', encoding='utf-8') as f:
                source = f.read()
            program = collect_program(source.splitlines())
        else:
            program = collect_program(read_console(stdin, out))
            # Console lines are numbered by their position in the collected program
            source = "\n".join(program)

        if output_lst:
            print(f"Writing listing file to {output_lst}...", file=out)
            write_listing(source, output_lst)

        simulate(program, out, trace)

    except (ParserException, InstructionException, ExecutionException) as e:
        print(f"\nSimulation failed: {e}", file=sys.stderr)
        return 1
    except FileNotFoundError:
        print(f"\nError: Input file not found: {input_filename}", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"\nAn unexpected error occurred: {e}", file=sys.stderr)
        traceback.print_exc()
        return 1
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    arg_parser = argparse.ArgumentParser(description="Simulate a program for the 8-register 32-bit processor.")
    arg_parser.add_argument("input_file", nargs="?",
                            help="Path to the program file. Instructions are read from the console if omitted.")
    arg_parser.add_argument("-q", "--quiet", action="store_true", help="Do not trace each executed instruction.")
    arg_parser.add_argument("--listing", metavar="FILE", help="Write the encoded program listing to FILE.")
    arg_parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")

    args = arg_parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    return simulate_file(args.input_file, trace=not args.quiet, output_lst=args.listing)


if __name__ == "__main__":
    sys.exit(main())
