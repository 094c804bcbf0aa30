# Bradford Arrington 2025
import os
import time
import tracemalloc

import psutil

from huff import DEBUG_HIGH, DEBUG_LOW

_printed_header = False


def file_size(file_name: str) -> int:
    try:
        file_info = os.stat(file_name)
        return file_info.st_size
    except FileNotFoundError:
        return 0


def print_ratios(input_file_path: str, output_file_path: str):
    input_size = file_size(input_file_path)
    if input_size == 0:
        input_size = 1

    output_size = file_size(output_file_path)
    ratio = 100 - int((output_size * 100) / input_size)

    print(f"\nInput bytes:             {input_size}")
    print(f"Output bytes:            {output_size}")
    print(f"Compression ratio:       {ratio}%")


def short_name(prog_name: str) -> str:
    last_slash = max(prog_name.rfind('\\'), prog_name.rfind('/'), prog_name.rfind(':'))
    name = prog_name[last_slash + 1:]
    extension = name.rfind('.')
    if extension != -1:
        name = name[:extension]
    return name


def debug_level(flags: list) -> int:
    # -d dumps the model, -dd also reports bit counts
    level = 0
    for flag in flags:
        if flag == "-dd":
            level = max(level, DEBUG_HIGH)
        elif flag == "-d":
            level = max(level, DEBUG_LOW)
        else:
            print(f"Unknown argument: {flag}")
    return level


def track_performance(name, func, *args, **kwargs):
    """Run func, then print wall time, CPU time and traced memory for it."""
    global _printed_header

    process = psutil.Process(os.getpid())
    start_time = time.time()
    start_cpu = process.cpu_times().user
    tracemalloc.start()
    start_mem = tracemalloc.get_traced_memory()[0]

    try:
        result = func(*args, **kwargs)
    finally:
        end_mem = tracemalloc.get_traced_memory()[1]
        tracemalloc.stop()
    end_cpu = process.cpu_times().user
    end_time = time.time()

    wall_time_ms = (end_time - start_time) * 1000
    cpu_time_ms = (end_cpu - start_cpu) * 1000
    mem_used_kb = (end_mem - start_mem) / 1024

    if not _printed_header:
        print(f"{'Function':<20} {'Wall Time (ms)':>15} {'CPU Time (ms)':>15} {'Memory Used (KB)':>20}")
        _printed_header = True

    print(f"{name:<20} {wall_time_ms:15.2f} {cpu_time_ms:15.2f} {mem_used_kb:20.2f}")

    return result
