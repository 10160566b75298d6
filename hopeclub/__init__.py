"""Hope Club points economy: ledger, redemptions and activity reporting."""
