"""Run this to verify the Supabase database and Realtime settings: python check_supabase.py"""
import asyncio
import sys

from sqlalchemy import text


async def check_database() -> int:
    from post_studio.models.db_models import dispose_db, init_db

    try:
        factory = init_db()
    except ValueError as e:
        print(e, file=sys.stderr)
        return 1
    try:
        async with factory() as session:
            await session.execute(text("SELECT 1"))
        print("Supabase database connected successfully.")
        return 0
    except Exception as e:
        err = str(e).strip()
        if "11001" in err or "getaddrinfo" in err:
            print("Connection failed: Could not resolve database host (DNS error).", file=sys.stderr)
            print("Fix: In Supabase Dashboard -> Settings -> Database, use the 'Transaction' (pooler) connection string.", file=sys.stderr)
            print("It should look like: ...@aws-0-XX.pooler.supabase.com:6543/postgres", file=sys.stderr)
        else:
            print("Connection failed:", e, file=sys.stderr)
        return 1
    finally:
        await dispose_db()


async def check_realtime() -> int:
    from post_studio.config import settings
    from supabase import acreate_client

    if not settings.realtime_enabled:
        print("SUPABASE_URL / SUPABASE_KEY not set: live updates disabled, the app will poll only.", file=sys.stderr)
        return 0
    try:
        client = await acreate_client(settings.supabase_url, settings.supabase_key)
        await client.table(settings.drafts_table).select("flow_id").limit(1).execute()
        print("Supabase API reachable:", settings.supabase_url)
    except Exception as e:
        print("Supabase API check failed:", e, file=sys.stderr)
        return 1

    joined = asyncio.Event()

    def on_status(status, err):
        if str(getattr(status, "value", status)) == "SUBSCRIBED":
            joined.set()
        elif err is not None:
            print("Realtime channel error:", err, file=sys.stderr)

    channel = client.channel("check_supabase")
    channel.on_postgres_changes("*", schema="public", table=settings.drafts_table, callback=lambda payload: None)
    try:
        await channel.subscribe(on_status)
        await asyncio.wait_for(joined.wait(), timeout=10)
        print(f"Realtime channel joined; changes on {settings.drafts_table} will be pushed.")
        return 0
    except Exception as e:
        print("Realtime join failed (the app will fall back to polling):", str(e) or "timed out", file=sys.stderr)
        return 1
    finally:
        await client.remove_channel(channel)


async def check() -> int:
    db = await check_database()
    rt = await check_realtime()
    return db or rt


if __name__ == "__main__":
    exit_code = asyncio.run(check())
    sys.exit(exit_code)
