import json
import random
import uuid
from datetime import datetime, timedelta, timezone
from pathlib import Path

from zwm_core import create_agent_mention, create_task_mention
from zwm_core.protocol import DIGIT_POOL, FRAME_SEP

AGENTS = [("Architect", "architect"), ("Code Reviewer", "review"), ("Debugger", "debug"), ("软件架构师", "architect")]
TASKS = ["Refactor login flow", "Fix flaky upload test", "整理发布说明", "Migrate billing schema"]


def get_timestamp(start_time: datetime, offset_seconds: float) -> str:
    t = start_time + timedelta(seconds=offset_seconds)
    return t.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def corrupt_payload(carrier: str) -> str:
    """Shift the first payload symbol of the first frame to a different digit."""
    i = carrier.index(FRAME_SEP) + 1
    new = DIGIT_POOL[(DIGIT_POOL.index(carrier[i]) + 1) % len(DIGIT_POOL)]
    return carrier[:i] + new + carrier[i + 1:]


def generate_transcript(output_dir: str, corrupt: bool = False) -> Path:
    session_id = str(uuid.uuid4())
    start_time = datetime.now(timezone.utc)

    messages = []
    t = 0.0

    # 1. Plain chatter
    messages.append({"ts": get_timestamp(start_time, t), "sender": "user", "text": "Morning, picking up where we left off."})

    # 2. Agent mention
    agent, mode = random.choice(AGENTS)
    t += 2.0
    messages.append({
        "ts": get_timestamp(start_time, t),
        "sender": "user",
        "text": create_agent_mention(agent, mode) + " please review the plan.",
    })

    # 3. Task mention with id, plus a second mention in the same message
    task = random.choice(TASKS)
    t += 3.5
    text = (
        "Track this under "
        + create_task_mention(task, task_id=f"task-{random.randint(1000, 9999)}", extra={"priority": "high"})
        + " and loop in "
        + create_agent_mention("Debugger", "debug")
    )
    if corrupt:
        text = corrupt_payload(text)
    messages.append({"ts": get_timestamp(start_time, t), "sender": "user", "text": text})

    # 4. Sign off
    t += 1.0
    messages.append({"ts": get_timestamp(start_time, t), "sender": "assistant", "text": "On it."})

    out = Path(output_dir) / f"transcript-{session_id[:8]}"
    out.mkdir(parents=True, exist_ok=True)

    with open(out / "messages.jsonl", "wb") as f:
        for msg in messages:
            line = json.dumps(msg, sort_keys=True, separators=(',', ':'), ensure_ascii=False)
            f.write(line.encode("utf-8") + b"\n")

    print(f"GENERATED: {out}")
    return out


if __name__ == "__main__":
    import sys

    # Usage:
    #   python tools/sim_chat.py OUT_DIR [--runs N] [--corrupt]

    args = [a for a in sys.argv[1:] if a]

    def pop_flag(arg_list: list[str], flag: str) -> tuple[bool, list[str]]:
        """Remove a boolean flag from an argv-style list."""
        if flag in arg_list:
            return True, [a for a in arg_list if a != flag]
        return False, arg_list

    corrupt, args = pop_flag(args, "--corrupt")

    runs = 1
    if "--runs" in args:
        i = args.index("--runs")
        if i + 1 >= len(args):
            raise SystemExit("--runs requires a value")
        runs = int(args[i + 1])
        args = args[:i] + args[i + 2:]

    out = args[0] if len(args) > 0 else "simulated_transcripts"
    for _ in range(runs):
        generate_transcript(out, corrupt=corrupt)
