"""Shell command tool and read-only command recognition."""