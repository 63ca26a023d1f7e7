def log(tag: str, msg: str) -> None:
    print(f"[{tag}] {msg}", flush=True)
