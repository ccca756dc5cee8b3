#!/usr/bin/env python3
"""
Database setup - creates the incidents schema and optionally loads sample data.
"""

import argparse
import sys
from pathlib import Path

import dotenv
dotenv.load_dotenv()

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.core.config import get_db_path
from src.core.dao import get_incident_count
from src.core.db import init_db, seed_db

SAMPLE_INCIDENTS = [
    {"timestamp": "2026-02-11 08:00:00", "source_ip": "192.168.1.100", "severity": "critical",
     "type": "malware", "status": "open", "description": "Ransomware beacon detected on finance workstation"},
    {"timestamp": "2026-02-11 09:00:00", "source_ip": "10.0.0.50", "severity": "high",
     "type": "brute_force", "status": "investigating", "description": "Repeated SSH login failures from jump host"},
    {"timestamp": "2026-02-11 10:00:00", "source_ip": "172.16.0.25", "severity": "medium",
     "type": "phishing", "status": "resolved", "description": "Credential phishing link clicked, password reset"},
    {"timestamp": "2026-02-11 11:00:00", "source_ip": "192.168.2.200", "severity": "low",
     "type": "unauthorized_access", "status": "closed", "description": "Badge reader denied after-hours entry"},
    {"timestamp": "2026-02-10 22:15:00", "source_ip": "10.10.10.10", "severity": "high",
     "type": "data_exfiltration", "status": "open", "description": "Large outbound transfer to unknown host"},
    {"timestamp": "2026-02-10 14:30:00", "source_ip": "192.168.1.23", "severity": "medium",
     "type": "malware", "status": "investigating", "description": "Adware bundle flagged by endpoint agent"},
    {"timestamp": "2026-02-09 07:45:00", "source_ip": "10.0.3.7", "severity": "low",
     "type": "phishing", "status": "closed", "description": None},
    {"timestamp": "2026-02-09 18:05:00", "source_ip": "172.16.4.90", "severity": "critical",
     "type": "unauthorized_access", "status": "investigating", "description": "Admin console reached from guest VLAN"},
    {"timestamp": "2026-02-08 12:00:00", "source_ip": "192.168.5.5", "severity": "medium",
     "type": "brute_force", "status": "resolved", "description": "VPN password spraying blocked"},
    {"timestamp": "2026-02-08 03:20:00", "source_ip": "10.20.30.40", "severity": "high",
     "type": "malware", "status": "open", "description": "Suspicious PowerShell spawned by Office macro"},
    {"timestamp": "2026-02-07 16:40:00", "source_ip": "172.16.9.9", "severity": "low",
     "type": "data_exfiltration", "status": "closed", "description": "USB mass storage write on kiosk"},
    {"timestamp": "2026-02-07 09:10:00", "source_ip": "192.168.8.14", "severity": "medium",
     "type": "phishing", "status": "open", "description": "Spoofed invoice email reported by user"},
]


def main():
    parser = argparse.ArgumentParser(
        description="Create the incident log database schema",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s            # Schema only (no seed data)
  %(prog)s --seed     # Schema + sample incidents

Environment variables:
- DB_PATH=./data/incidents.db (database file)
        """
    )

    parser.add_argument(
        "--seed",
        action="store_true",
        help="Insert sample incidents after creating the schema"
    )

    args = parser.parse_args()

    print(f"\n📦 Setting up database: {get_db_path()}\n")
    try:
        init_db()
        print("1️⃣  Schema created")

        if args.seed:
            inserted = seed_db(SAMPLE_INCIDENTS)
            print(f"2️⃣  Inserted {inserted} sample incidents")
        else:
            print("2️⃣  Skipping sample data (use --seed flag to populate data)")

        print(f"\n📊 Incidents in database: {get_incident_count()}")
        print("\n✅ Database setup completed successfully!\n")
        return 0

    except Exception as e:
        print(f"\n❌ Database setup failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
