"""Per-site extractors (universal, udn, vimeo, xvideos, yinyuetai, youku), each with an ``extract`` function."""