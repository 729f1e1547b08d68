#!/usr/bin/env python3
"""
Send sample data to a running Health Watch API to exercise outbreak detection.

Usage:
    # Submit four diarrhea reports from one village (disease cluster + monsoon alerts)
    python scripts/send_test_data.py report-cluster --village Rampur --symptoms Diarrhea --count 4

    # Submit an acidic water reading (water-quality alert)
    python scripts/send_test_data.py sensor --village Rampur --ph 6.0 --turbidity 2

    # Send a villager SMS report
    python scripts/send_test_data.py sms --village Rampur --name "Sita Devi" --symptoms Vomiting

    # Show the alert feed a role would see
    python scripts/send_test_data.py alerts --role villager
"""

import asyncio
from typing import Any

import httpx
import typer

from healthwatch.modules.reports.sms import render_sms_report

app = typer.Typer()

BASE_URL = "http://localhost:8000"
API = f"{BASE_URL}/api/v1"


def _report(response: httpx.Response, label: str) -> Any:
    if response.status_code in [200, 201]:
        typer.echo(f"{label}: ok ({response.status_code})")
        return response.json()
    typer.echo(f"{label}: failed ({response.status_code})", err=True)
    typer.echo(f"Response: {response.text}", err=True)
    return None


@app.command()
def report_cluster(
    village: str = typer.Option("Rampur", help="Village to report from"),
    symptoms: str = typer.Option("Diarrhea", help="Symptom label used for every report"),
    count: int = typer.Option(3, min=1, help="Number of reports to submit"),
    submitter_id: str = typer.Option("asha-demo", help="Submitting ASHA worker id"),
) -> None:
    """Submit several identical reports so the cluster rule crosses its threshold."""
    asyncio.run(_report_cluster(village, symptoms, count, submitter_id))


async def _report_cluster(village: str, symptoms: str, count: int, submitter_id: str) -> None:
    async with httpx.AsyncClient() as client:
        for index in range(count):
            response = await client.post(
                f"{API}/reports",
                json={
                    "patientName": f"Patient {index + 1}",
                    "village": village,
                    "symptoms": symptoms,
                    "waterSource": "Hand pump",
                    "submitterId": submitter_id,
                },
            )
            _report(response, f"report {index + 1}/{count}")


@app.command()
def sensor(
    village: str = typer.Option("Rampur", help="Village the sensor is in"),
    ph: float = typer.Option(7.0, help="pH reading"),
    turbidity: float = typer.Option(1.0, help="Turbidity in NTU"),
) -> None:
    """Submit one water-quality reading."""
    asyncio.run(_sensor(village, ph, turbidity))


async def _sensor(village: str, ph: float, turbidity: float) -> None:
    async with httpx.AsyncClient() as client:
        response = await client.post(
            f"{API}/sensors", json={"village": village, "ph": ph, "turbidity": turbidity}
        )
        _report(response, f"sensor {village} pH={ph} turbidity={turbidity}")


@app.command()
def sms(
    village: str = typer.Option("Rampur", help="Village of the patient"),
    name: str = typer.Option("Sita Devi", help="Patient name"),
    symptoms: str = typer.Option("Vomiting", help="Reported symptoms"),
    age: int = typer.Option(30, help="Patient age"),
    sender_id: str = typer.Option("villager-demo", help="Sending villager id"),
) -> None:
    """Relay a villager SMS report through the SMS endpoint."""
    body = render_sms_report(name, village, symptoms, age=age)
    typer.echo(body)
    asyncio.run(_sms(body, sender_id))


async def _sms(body: str, sender_id: str) -> None:
    async with httpx.AsyncClient() as client:
        response = await client.post(
            f"{API}/reports/sms", json={"body": body, "senderId": sender_id}
        )
        _report(response, "sms report")


@app.command()
def alerts(
    role: str = typer.Option("official", help="Role whose feed to show"),
    limit: int = typer.Option(10, help="Number of alerts to show"),
) -> None:
    """Print the newest alerts targeting a role."""
    asyncio.run(_alerts(role, limit))


async def _alerts(role: str, limit: int) -> None:
    async with httpx.AsyncClient() as client:
        response = await client.get(f"{API}/alerts", params={"role": role, "limit": limit})
        feed = _report(response, f"alerts for {role}")
    for alert in feed or []:
        marker = "auto" if alert.get("auto") else "manual"
        typer.echo(f"[{alert['createdAt']}] ({marker}) {alert['message']}")


if __name__ == "__main__":
    app()
